"""
Launcher for running PDF Annotator from a source checkout:
    python run.py [file.pdf]
"""

import sys
from pathlib import Path

# Make the pdf_annotator package importable without installing it
sys.path.insert(0, str(Path(__file__).parent))

from pdf_annotator.main import main

if __name__ == "__main__":
    main()
