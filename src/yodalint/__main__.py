import sys

from yodalint.cli import main

sys.exit(main())
