import sys

from TextSearch.main import main

if __name__ == "__main__":
    sys.exit(main())
