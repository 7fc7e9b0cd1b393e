# coding: utf-8

import sys

from dn42roa.tools.roagen import main

if __name__ == '__main__':
    sys.exit(main())
