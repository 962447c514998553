#!/usr/bin/env python3

"""Logging functions
Print analysis traces with indentation and ANSI formatting"""

indentation = 0


def initialize_logger():
    global indentation
    indentation = 0


def log_indentation(str):
    str = str.replace("\n", f"\n{' ' * indentation * 4}")
    print(f"{' ' * indentation * 4}{str}")


# Run f one indentation level deeper, used to nest the trace of a phase
def indented(f, *args, **kwargs):
    global indentation
    indentation += 1
    try:
        return f(*args, **kwargs)
    finally:
        indentation -= 1


def ii(str):
    return f"{' ' * 4}{str}"


def di(str):
    return f"{' ' * 8}{str}"


BASE = "\033["
RST = BASE + "0m"
CODE = {
    "GREEN": BASE + "32m",
    "YELLOW": BASE + "33m",
    "BLUE": BASE + "34m",
    "MAGENTA": BASE + "35m",
    "CYAN": BASE + "36m",

    "BOLD": BASE + "01m",
    "ITALIC": BASE + "03m",
    "UNDERLINE": BASE + "04m"
}


def ANSI(code, str):
    return f"{CODE[code]}{str}{RST}"


def green(str):
    return ANSI("GREEN", str)


def yellow(str):
    return ANSI("YELLOW", str)


def blue(str):
    return ANSI("BLUE", str)


def magenta(str):
    return ANSI("MAGENTA", str)


def cyan(str):
    return ANSI("CYAN", str)


def bold(str):
    return ANSI("BOLD", str)


def h1(str):
    return f"\n{CODE['BOLD']}{CODE['ITALIC']}{CODE['UNDERLINE']}{CODE['MAGENTA']}{str}{RST}\n"


def h2(str):
    return f"\n{CODE['BOLD']}{CODE['BLUE']}{str}{RST}\n"


def remove_formatting(str):
    str = str.replace(RST, "")
    for code in CODE.values():
        str = str.replace(code, "")
    return str
