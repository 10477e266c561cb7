#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Lay out a directory of photos onto A4 print sheets.
"""

# Standard Library
import sys

# local repo modules
import photo_sheet_layout.cli


if __name__ == "__main__":
	sys.exit(photo_sheet_layout.cli.main())
