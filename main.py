import sys
from pathlib import Path

# add src to sys.path
sys.path.append(str(Path(__file__).resolve().parent / 'src'))

from gvf.cli import main

if __name__ == '__main__':
    sys.exit(main())
