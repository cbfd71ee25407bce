#! /usr/bin/env python3
"""
Interactive shell for simplifying arithmetic expressions.

Usage:
    symbolic                     Start the read-eval-print loop
    symbolic -e "2 * (2 + x)"    Simplify one expression and exit

Inside the loop, `debug` toggles the structural dump and timing output and
`exit` (or end of input) leaves the shell.
"""

import argparse
import logging
import sys
import time

from .assembler import AssemblyError, MismatchedParenthesisError, parse
from .config import Config
from .tokenizer import TokenizationError

log = logging.getLogger(__name__)


class ComputationResult:
    def __init__(self, expression, simplified, elapsed_ms):
        self.expression = expression
        self.simplified = simplified
        self.elapsed_ms = elapsed_ms

    @classmethod
    def from_input(cls, line):
        start = time.perf_counter()
        expression = parse(line)
        simplified = expression.simplify()
        elapsed_ms = (time.perf_counter() - start) * 1000
        return cls(expression, simplified, elapsed_ms)


class Shell:
    def __init__(self, debug=False, prompt=Config.PROMPT):
        self.debug = debug
        self.prompt = prompt

    def run(self):
        self.print_line('')
        while True:
            try:
                line = input(f'\n{self.prompt}')
            except EOFError:
                break

            normalized = line.strip().lower()
            if normalized == 'exit':
                break
            elif normalized == 'debug':
                self.toggle_debug()
            elif normalized:
                self.handle_input(line)
        return 0

    def toggle_debug(self):
        self.debug = not self.debug
        if self.debug:
            self.print_line('Debug mode enabled.')
        else:
            self.print_line('Debug mode disabled.')

    def handle_input(self, line):
        """Print the raw and simplified form of `line`; returns whether the
        input could be read."""
        try:
            result = ComputationResult.from_input(line)
        except TokenizationError as e:
            log.info('tokenization failed for %r: %s', line, e)
            self.print_error(f'Problem parsing the input: {e}')
            return False
        except MismatchedParenthesisError:
            log.info('mismatched parentheses in %r', line)
            self.print_error('Input has mismatched parentheses.')
            return False
        except AssemblyError as e:
            log.info('assembly failed for %r: %s', line, e)
            self.print_error(
                f'Failure to construct expression from input: {e}'
            )
            return False

        self.print_line(f'Input:                 {result.expression.text()}')
        self.print_line(f'Simplified:            {result.simplified.text()}')
        if self.debug:
            self.print_line(f'With types:            {result.expression!r}')
            self.print_line(f'Simplified with types: {result.simplified!r}')
            print()
            self.print_line(
                f'Query completed in {result.elapsed_ms:.0f} ms.'
            )
        return True

    def print_line(self, string):
        print(f'  {string}')

    def print_error(self, message):
        self.print_line(f'ERROR: {message}')


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='symbolic',
        description='Simplify arithmetic expressions.',
    )
    parser.add_argument('-e', '--expression',
                        help='simplify EXPRESSION and exit')
    parser.add_argument('-d', '--debug', action='store_true',
                        default=Config.DEBUG,
                        help='show structural dumps and timings')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        type=str.upper)
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level,
                        format='%(levelname)s  %(name)s  %(message)s')

    shell = Shell(debug=args.debug)
    if args.expression is not None:
        return 0 if shell.handle_input(args.expression) else 1
    return shell.run()


if __name__ == '__main__':
    sys.exit(main())
