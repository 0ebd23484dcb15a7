"""
Command-line interface: argument parsing and the classification run.
"""
import argparse
import logging
import sys
from typing import BinaryIO, List, Optional, TextIO

from . import __version__
from .acquisition import acquire
from .config import DEFAULT_DELIMITER, Configuration
from .errors import InvalidArgument, LangsniffError
from .formatting import format_listing, format_record
from .language_detector import LanguageClassifier
from .models import LanguageDetectionEngine, load_engine
from .registry import LanguageRegistry

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises InvalidArgument instead of exiting."""

    def error(self, message):
        raise InvalidArgument(message)


class StoreOnce(argparse.Action):
    """Store an option value, rejecting a second occurrence of the option."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is not None:
            parser.error(f"{option_string} may only be given once")
        setattr(namespace, self.dest, values)


def probability(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"must be between 0.0 and 1.0, got {value}")
    return number


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def positive_int(value: str) -> int:
    number = non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='langsniff',
        description='Classify the language of text given as arguments or on standard input'
    )

    parser.add_argument('text', nargs='*',
                        help='Text to classify; read from standard input when absent')
    parser.add_argument('-l', '--languages', action=StoreOnce, metavar='CODES',
                        help='Comma-separated ISO-639-1 codes of candidate languages. '
                             'Restricting the set improves accuracy on short texts')
    parser.add_argument('-n', '--per-line', action='store_true',
                        help='Classify each line separately and echo it as a third column')
    parser.add_argument('-L', '--list', action='store_true',
                        help='List supported languages and exit')
    parser.add_argument('-c', '--confidence', type=probability, metavar='THRESHOLD',
                        help='Report results below this confidence (0.0-1.0) as undetermined')
    parser.add_argument('-M', '--minlength', type=non_negative_int, metavar='LETTERS',
                        help='Minimum number of letters (ignoring whitespace, punctuation '
                             'and numerals); shorter units are reported as undetermined')
    parser.add_argument('-p', '--parallel', action='store_true',
                        help='Classify lines in parallel worker threads')
    parser.add_argument('-j', '--jobs', type=positive_int, metavar='N',
                        help='Number of worker threads for --parallel')
    parser.add_argument('-d', '--delimiter', default=DEFAULT_DELIMITER,
                        help='Output field delimiter (default: tab)')
    parser.add_argument('--model', type=str, metavar='PATH',
                        help='fastText language identification model (lid.176.bin) '
                             'to use instead of langdetect')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log progress to standard error (-vv for debug output)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse the argument vector; flags and text tokens may be interleaved."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    # -L lists and exits; the remaining flags never take effect
    if args.list:
        return args

    if args.jobs is not None and not args.parallel:
        parser.error('-j/--jobs requires -p/--parallel')
    if not args.delimiter:
        parser.error('-d/--delimiter must not be empty')

    return args


def build_configuration(args: argparse.Namespace, registry: LanguageRegistry) -> Configuration:
    """Resolve parsed arguments into the immutable run configuration."""
    candidates = frozenset()
    if args.languages is not None:
        candidates = registry.resolve(args.languages.split(','))
        logger.info(f"Restricting detection to {len(candidates)} languages")

    inline_text = ' '.join(args.text) if args.text else None

    if args.parallel and not args.per_line:
        logger.info("--parallel has no effect without --per-line")

    return Configuration(
        candidate_languages=candidates,
        line_mode=args.per_line,
        inline_text=inline_text,
        confidence_threshold=args.confidence,
        min_length=args.minlength,
        parallel=args.parallel,
        workers=args.jobs,
        delimiter=args.delimiter
    )


def configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def report_error(error: LangsniffError):
    logger.debug("Run aborted", exc_info=error)
    print(f"error: {error}", file=sys.stderr)


def run(argv: Optional[List[str]] = None,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[TextIO] = None,
        engine: Optional[LanguageDetectionEngine] = None) -> int:
    """
    Execute one classification run.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        stdin: Binary input stream (defaults to standard input)
        stdout: Text output stream (defaults to standard output)
        engine: Detection engine; loaded from the arguments when omitted

    Returns:
        Process exit code
    """
    stdout = stdout if stdout is not None else sys.stdout

    try:
        args = parse_args(argv)
    except SystemExit as e:
        # --help and --version
        return e.code if isinstance(e.code, int) else 0
    except InvalidArgument as e:
        report_error(e)
        return e.exit_code

    configure_logging(args.verbose)

    try:
        if engine is None:
            engine = load_engine(args.model)
        registry = LanguageRegistry(engine.supported_languages())

        if args.list:
            for row in format_listing(registry.listing()):
                stdout.write(row + '\n')
            return 0

        config = build_configuration(args, registry)
        if stdin is None and config.inline_text is None:
            stdin = getattr(sys.stdin, 'buffer', None)

        units = acquire(config, stdin)
        classifier = LanguageClassifier(engine, registry, config)
        results = classifier.classify_all(units)
    except LangsniffError as e:
        report_error(e)
        return e.exit_code

    for result in results:
        stdout.write(format_record(result, config.line_mode, config.delimiter) + '\n')
    stdout.flush()

    undetermined = sum(1 for result in results if result.is_undetermined)
    logger.info(f"Classified {len(results)} units ({undetermined} undetermined)")
    return 0


def main():
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8')
    sys.exit(run())


if __name__ == '__main__':
    main()
