from rich.pretty import pprint

from cmdtree import *


def add(context, args):
    parser = flagset(context)
    parser.add_argument("-email", required=True)
    pprint({"path": names(context), "email": parser.parse_args(args).email})


tool = rootset(
    commandset("user", "manage users",
        command("add", "add a new user", add),
        command("delete", "delete a user", None),
    ),
    commandset("post", "manage posts"),
)


if __name__ == '__main__':
    invoke(tool)
