"""
Demonstration command tree, runnable as ``python -m optarbor``.

    python -m optarbor -vv add -j 4 notes.txt todo.txt
    python -m optarbor list --columns=name,size
    python -m optarbor help add
"""
from rich.pretty import pprint

from optarbor import *

verbosity = Slot(0)
output = Slot()
jobs = Slot(1)
dry_run = Slot(0)
force = Slot(0)
columns = Slot(["name"])
column_count = Slot(1)


def report(operands):
    pprint({
        "command": active().command.name,
        "operands": operands[1:],
        "verbosity": verbosity.value,
        "output": output.value,
        "jobs": jobs.value,
        "dry-run": bool(dry_run.value),
        "force": bool(force.value),
        "columns": columns.value,
    })


helper = Option("-h", "--help", callback=print_help, descr="print this help and exit")

add = Command(
    "add",
    about="add files to the index",
    descr="Adds every FILE to the index. Files already indexed are refreshed.",
    operands="FILE...",
    callback=report,
    options=[
        helper,
        Option("-n", "--dry-run", flag=dry_run, descr="show what would be added"),
        Option("-j", "--jobs", metavar="N", type=DataType.UINT, dest=jobs, descr="index N files in parallel"),
    ],
)

remove = Command(
    "remove",
    about="remove files from the index",
    operands="FILE...",
    callback=report,
    options=[
        helper,
        Option("-f", "--force", flag=force, group=1, descr="remove files even when they are modified"),
        Option("-i", "--interactive", flag=force, action=Action.SET_FALSE, group=1, descr="ask before every removal"),
    ],
)

listing = Command(
    "list",
    about="list indexed files",
    callback=report,
    options=[
        helper,
        Option(
            "--columns",
            metavar="COLS",
            delimiter=",",
            dest=columns,
            count=column_count,
            descr="comma separated columns to show (name, size, mtime)",
        ),
    ],
)

demo = Command(
    "optarbor",
    about="optarbor - declarative command-line parsing demo",
    descr="A tiny file index showing options, exclusive groups and subcommands.",
    options=[
        helper,
        Option("-v", "--verbose", flag=verbosity, action=Action.INCREMENT, descr="print more details (repeatable)"),
        Option("-q", "--quiet", flag=verbosity, action=Action.SET_FALSE, descr="print errors only"),
        Option("-o", "--output", metavar="FILE", dest=output, descr="write the report to FILE"),
        Option("--trace", hidden=True, callback=lambda: setattr(verbosity, "value", 99)),
    ],
    children=[
        add,
        remove,
        listing,
        Command(
            "help",
            about="show the help of a command",
            operands="[COMMAND...]",
            callback=print_help_subcommand,
        ),
    ],
)


def main():
    parse(demo)


if __name__ == "__main__":
    main()
