import argparse
import json
import logging
import sys

import ddc_brightness_control as DBC
from ddc_brightness_control.exceptions import KernelModuleError, StateWriteError, format_exc
from ddc_brightness_control.linux import ensure_i2c_dev
from ddc_brightness_control.types import Operation

_logger = logging.getLogger('ddc_brightness_control.cli')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ddc-brightness',
        description='Adjust the brightness of an external monitor over DDC/CI'
    )
    parser.add_argument(
        'operation', nargs='?', choices=[i.value for i in Operation],
        help='how to adjust the brightness'
    )
    parser.add_argument('-d', '--display', type=int, help='the ddcutil display number to adjust')
    parser.add_argument('-f', '--state-file', help='where the last brightness value is kept', metavar='PATH')
    parser.add_argument('-g', '--get', action='store_true', help='print the current brightness and exit')
    parser.add_argument('--reset', action='store_true', help='forget the saved brightness value')
    parser.add_argument('--no-notify', action='store_true', help='do not send desktop notifications')
    parser.add_argument('--no-module-check', action='store_true', help='do not check that i2c-dev is loaded')
    parser.add_argument('--debug-info', action='store_true', help='print debugging information and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='log what is happening')
    parser.add_argument('-V', '--version', action='store_true', help='print the current version')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.version:
        print(DBC.__version__)
        return 0

    kw = {}
    if args.display is not None:
        kw['display'] = args.display
    if args.state_file is not None:
        kw['state_file'] = args.state_file

    if args.debug_info:
        from ddc_brightness_control import _debug
        print(json.dumps(_debug.info(**kw), indent=2, default=str))
        return 0

    if args.reset:
        try:
            removed = DBC.FileStateStore(kw.get('state_file')).clear()
        except StateWriteError as e:
            print(f'Failed: {e}', file=sys.stderr)
            return 1
        print('Saved brightness cleared' if removed else 'No saved brightness')
        if args.operation is None:
            return 0

    if args.get:
        print(f'{DBC.get_brightness(**kw)}%')
        return 0

    if args.operation is None:
        parser.error('an operation must be specified, one of: ' + ', '.join(i.value for i in Operation))

    if not args.no_module_check:
        try:
            if ensure_i2c_dev():
                _logger.info('loaded kernel module i2c-dev')
        except KernelModuleError as e:
            _logger.warning(format_exc(e))

    outcome = DBC.adjust_brightness(
        args.operation, notifier=DBC.Notifier(enabled=not args.no_notify), **kw
    )
    if not outcome.ok:
        for error in outcome.errors:
            print(f'Failed: {error}', file=sys.stderr)
        return 1

    if args.verbose:
        print(outcome.message)
    return 0


if __name__ == '__main__':
    sys.exit(main())
