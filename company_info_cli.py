#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Entry point cho CLI tool company-info
Có thể chạy: python company_info_cli.py hoặc python -m company_info.cli
"""

from company_info.cli import main

if __name__ == "__main__":
    import sys
    sys.exit(main())
