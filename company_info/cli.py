# company_info/cli.py
# -*- coding: utf-8 -*-

"""
Command-line interface cho company_info package
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from company_info import CompanyInfoClient, __version__
from company_info.config import load_config, load_env_files
from company_info.constants import (
    MSG_ERROR,
    MSG_API_ERROR_DETAIL,
    ERR_INVALID_OPTIONS_JSON,
)
from company_info.exceptions import (
    ApiError,
    CompanyInfoError,
    ConfigurationError,
    TransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Cấu hình logging cho CLI (stderr, stdout chỉ dành cho kết quả)"""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr
    )


def parse_options(raw: Optional[str]) -> dict:
    try:
        options = json.loads(raw or "{}")
    except ValueError as e:
        raise ValidationError(ERR_INVALID_OPTIONS_JSON.format(error=e), field="options")
    if not isinstance(options, dict):
        raise ValidationError(ERR_INVALID_OPTIONS_JSON.format(error="not an object"), field="options")
    return options


def search_command(
    search_type: str,
    search_key: str,
    api: str = "mof",
    fmt: Optional[str] = None,
    raw_options: Optional[str] = None
) -> int:
    """
    Tra cứu và in kết quả ra stdout

    Returns:
        0 nếu thành công, 1 nếu có lỗi
    """
    try:
        config = load_config(api=api, fmt=fmt)
        options = parse_options(raw_options)

        with CompanyInfoClient(config) as client:
            if search_type == "name":
                result = client.search_by_name(search_key, options)
            else:
                result = client.search_by_number(search_key, options)

        print(result)
        return 0

    except ApiError as e:
        print(MSG_ERROR.format(error=MSG_API_ERROR_DETAIL.format(status=e.status_code, body=e.body)),
              file=sys.stderr)
        return 1
    except (ConfigurationError, ValidationError, TransportError) as e:
        print(MSG_ERROR.format(error=e), file=sys.stderr)
        return 1
    except CompanyInfoError as e:
        logger.exception("Unexpected error")
        print(MSG_ERROR.format(error=e), file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="company-info",
        description="Tra cứu thông tin pháp nhân Nhật Bản (法人番号 API / gBizINFO API)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ví dụ:
  %(prog)s number 7000012050002
  %(prog)s number 7000012050002 --options '{"history": "1"}'
  %(prog)s --format csv name "国税庁" --options '{"mode": "2"}'
  %(prog)s --api meti number 7000012050002 --options '{"detail": true}'
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Hiển thị log chi tiết'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '--api',
        default='mof',
        help='Backend API: mof (財務省), meti (経済産業省). Mặc định: mof'
    )
    parser.add_argument(
        '--format',
        dest='fmt',
        default=None,
        help='Định dạng response. MOF: csv-sjis, csv, xml (mặc định). METI: json'
    )

    subparsers = parser.add_subparsers(dest='command', help='Loại tìm kiếm')

    number_parser = subparsers.add_parser('number', help='Tra cứu theo 法人番号')
    number_parser.add_argument(
        'search_key',
        help='法人番号 (MOF: tối đa 10 số, nối bằng dấu phẩy)'
    )
    number_parser.add_argument(
        '--options',
        default='{}',
        help='Options dạng JSON. MOF: {"history": "0|1"}. METI: {"detail": true}'
    )

    name_parser = subparsers.add_parser('name', help='Tra cứu theo tên pháp nhân (chỉ MOF)')
    name_parser.add_argument(
        'search_key',
        help='Tên pháp nhân'
    )
    name_parser.add_argument(
        '--options',
        default='{}',
        help='Options dạng JSON: mode, target, address, kind, change, close, from, to, divide'
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Entry point cho CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    load_env_files()

    return search_command(
        args.command,
        args.search_key,
        api=args.api,
        fmt=args.fmt,
        raw_options=args.options
    )


if __name__ == "__main__":
    sys.exit(main())
