from argparse import ArgumentParser

from orbitfield import config
from orbitfield.debuglog import setup_logging
from orbitfield.engine import Engine


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Drag two markers around the complex plane and watch z <- z*z + c.")
    parser.add_argument('--config', dest='config', metavar='PATH',
                        help='YAML file overriding the default settings')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='also log to stderr')
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    cfg = config.load_config(args.config)
    setup_logging(cfg.debug_log_path, verbose=args.verbose)
    engine = Engine(cfg)
    engine.run()


if __name__ == "__main__":
    main()
