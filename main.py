import logging
import math
import os.path
import sys

from rich.console import Console
from rich.text import Text

from pennant import boolean, string, number, evaluate, render, stringify

__prog__ = os.path.basename(sys.argv[0])

help = boolean("help", "Print this help information and exit.", short="h", urgent=True)
version = boolean("version", "Print version information and exit.", short="V", urgent=True)
verbose = boolean("verbose", "Print extra debugging information.", short="v", invertable=True)

count = number("count", "The amount of times to greet the user.", short="c", default=1, arg_name="amount")
color = string(
    "color",
    "Use colors when greeting.",
    default="auto",
    arg_optional="always",
    one_of=["always", "never", "auto"],
    invertable=True,
    arg_name="when",
)
prefix = string("prefix", "Prefix the greeting (with something).", short="p", arg_optional="Hello", arg_name="greeting")

age = number("age", "The age of the user, in years.", short="a", required=True, arg_name="years")
last_name = string("last-name", "The last name of the user.", required=True, arg_name="name")

flags = [
    help,
    version,
    verbose,
    "Customization options",
    count,
    color,
    prefix,
    "User details",
    age,
    last_name,
]


def main(args):
    stdout = Console()
    stderr = Console(stderr=True)

    if (error := evaluate(args, flags)) is not None:
        stderr.print(error)
        return 1

    # `--no-color` leaves an empty string behind
    if color.current == "":
        color.current = "never"
    colorful = color.current == "always" or (color.current == "auto" and stdout.is_terminal)

    if help.current:
        stdout.print("usage: ./%s [<options>] [--] <name>...\n" % __prog__, highlight=False)
        stdout.print(render(flags, prefix=4, colorful=colorful))
        return 0

    if version.current:
        stdout.print("%s - v1.0.0" % __prog__, highlight=False)
        return 0

    if not math.isfinite(count.current):
        stderr.print("the `count` flag expects a finite number", highlight=False)
        return 1

    if len(args) < 1:
        stderr.print("missing required positional argument - <name>", highlight=False)
        return 1

    if verbose.current:
        logging.basicConfig(level=logging.DEBUG, format="[ DEBUG ] %(message)s")
    logger = logging.getLogger(__prog__)

    def yellow(object):
        return Text(str(object), "yellow" if colorful else "")

    name = " ".join(args)

    logger.debug("configuration:")
    logger.debug("\tcount = %s", stringify(count.current))
    logger.debug("\tcolor = %s", stringify(color.current))
    logger.debug("\tprefix = %s", stringify(prefix.current))
    logger.debug("\tage = %s", stringify(age.current))
    logger.debug("\tlast-name = %s", stringify(last_name.current))
    logger.debug("\tname = %s", stringify(name))

    logger.debug("starting loop...")
    for index in range(int(count.current)):
        logger.debug("i = %d", index)

        line = yellow("%s %s" % (name, last_name.current))
        if prefix.current:
            line = Text.assemble("%s, " % prefix.current, line, "!")
        else:
            line = Text.assemble(line, " -")
        line = Text.assemble(line, " You are ", yellow(age.current), " years old!")

        stdout.print(line, highlight=False)

    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
