# nuitka-project: --product-name=CustomBullets
# nuitka-project: --file-description="Markdown custom bullets editor"
# nuitka-project: --standalone
# nuitka-project: --output-filename=custombullets.exe
# nuitka-project: --output-dir=./dist/
# nuitka-project: --enable-plugin=tk-inter
# nuitka-project: --follow-imports

"""
Entry point for .exe compilers.
"""

from custombullets.main import main

if __name__ == "__main__":
    main()
