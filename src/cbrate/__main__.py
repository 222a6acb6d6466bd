# src/cbrate/__main__.py
import sys

from cbrate.app import main

sys.exit(main())
