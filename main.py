import sys

from rich.pretty import pprint

from optbox import *

__prog__ = "optbox-demo"


if __name__ == '__main__':
    options = Options()
    arguments, errors = options.parse(sys.argv[1:], {
        "c:count": V(INT, 1, min=1, max=16),
        "t:tag": V(mergeable=True, alias="label"),
        "v:verbose": V(BOOL),
        "o:output": V(MIXED, conflicts="dry-run"),
        "dry-run": V(BOOL),
    })
    report(errors, exit=True)

    pprint(options)
    pprint(arguments)
    pprint(options.split("tag"))
