from rich.pretty import pprint

from optscan import *

parser = Parser(
    Option("v", "verbose", "chatty output"),
    Option("o", "out", "where to write", exact(1), mandatory=True),
    Option("i", "input", "files to read", UNLIMITED),
    Option("t", "tag", "labels for the run", up_to(3)),
)


if __name__ == '__main__':
    result = parser.parse()
    if not result.ok:
        parser.print_help()
    result.exit()
    pprint({option.long: parser.values_from_option(option.long) for option in parser if parser.has_option(option.long)})
