# main.py
from sealwallet.cli.cli import main

if __name__ == "__main__":
    main()
