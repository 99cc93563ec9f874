"""Standard-library module names per Python minor version.

Built once at import time from the 3.8 list plus per-release changes and
never mutated afterwards.
"""

from __future__ import annotations

import sys
from functools import lru_cache

_STDLIB_3_8 = frozenset(
    {
        "__future__", "__main__", "_abc", "_ast", "_asyncio", "_bisect", "_blake2",
        "_bootlocale", "_bz2", "_codecs", "_collections", "_collections_abc",
        "_compat_pickle", "_compression", "_contextvars", "_crypt", "_csv", "_ctypes",
        "_curses", "_datetime", "_dbm", "_decimal", "_dummy_thread", "_elementtree",
        "_frozen_importlib", "_frozen_importlib_external", "_functools", "_gdbm",
        "_hashlib", "_heapq", "_imp", "_io", "_json", "_locale", "_lsprof", "_lzma",
        "_markupbase", "_md5", "_multiprocessing", "_opcode", "_operator",
        "_osx_support", "_overlapped", "_pickle", "_posixshmem", "_posixsubprocess",
        "_py_abc", "_pydecimal", "_pyio", "_queue", "_random", "_sha1", "_sha256",
        "_sha3", "_sha512", "_signal", "_sitebuiltins", "_socket", "_sqlite3", "_sre",
        "_ssl", "_stat", "_statistics", "_string", "_strptime", "_struct", "_symtable",
        "_thread", "_threading_local", "_tkinter", "_tracemalloc", "_uuid", "_warnings",
        "_weakref", "_weakrefset", "_winapi", "_xxsubinterpreters",
        "abc", "aifc", "antigravity", "argparse", "array", "ast", "asynchat", "asyncio",
        "asyncore", "atexit", "audioop", "base64", "bdb", "binascii", "binhex", "bisect",
        "builtins", "bz2", "cProfile", "calendar", "cgi", "cgitb", "chunk", "cmath",
        "cmd", "code", "codecs", "codeop", "collections", "colorsys", "compileall",
        "concurrent", "configparser", "contextlib", "contextvars", "copy", "copyreg",
        "crypt", "csv", "ctypes", "curses", "dataclasses", "datetime", "dbm", "decimal",
        "difflib", "dis", "distutils", "doctest", "dummy_threading", "email",
        "encodings", "ensurepip", "enum", "errno", "faulthandler", "fcntl", "filecmp",
        "fileinput", "fnmatch", "formatter", "fractions", "ftplib", "functools", "gc",
        "genericpath", "getopt", "getpass", "gettext", "glob", "grp", "gzip", "hashlib",
        "heapq", "hmac", "html", "http", "idlelib", "imaplib", "imghdr", "imp",
        "importlib", "inspect", "io", "ipaddress", "itertools", "json", "keyword",
        "lib2to3", "linecache", "locale", "logging", "lzma", "mailbox", "mailcap",
        "marshal", "math", "mimetypes", "mmap", "modulefinder", "msilib", "msvcrt",
        "multiprocessing", "netrc", "nis", "nntplib", "nt", "ntpath", "nturl2path",
        "numbers", "opcode", "operator", "optparse", "os", "ossaudiodev", "parser",
        "pathlib", "pdb", "pickle", "pickletools", "pipes", "pkgutil", "platform",
        "plistlib", "poplib", "posix", "posixpath", "pprint", "profile", "pstats", "pty",
        "pwd", "py_compile", "pyclbr", "pydoc", "pydoc_data", "pyexpat", "queue",
        "quopri", "random", "re", "readline", "reprlib", "resource", "rlcompleter",
        "runpy", "sched", "secrets", "select", "selectors", "shelve", "shlex", "shutil",
        "signal", "site", "smtpd", "smtplib", "sndhdr", "socket", "socketserver", "spwd",
        "sqlite3", "sre_compile", "sre_constants", "sre_parse", "ssl", "stat",
        "statistics", "string", "stringprep", "struct", "subprocess", "sunau", "symbol",
        "symtable", "sys", "sysconfig", "syslog", "tabnanny", "tarfile", "telnetlib",
        "tempfile", "termios", "textwrap", "this", "threading", "time", "timeit",
        "tkinter", "token", "tokenize", "trace", "traceback", "tracemalloc", "tty",
        "turtle", "turtledemo", "types", "typing", "unicodedata", "unittest", "urllib",
        "uu", "uuid", "venv", "warnings", "wave", "weakref", "webbrowser", "winreg",
        "winsound", "wsgiref", "xdrlib", "xml", "xmlrpc", "xxsubtype", "zipapp",
        "zipfile", "zipimport", "zlib",
    }
)

# (added, removed) per minor release, applied cumulatively on top of 3.8.
_CHANGES: dict[tuple[int, int], tuple[frozenset[str], frozenset[str]]] = {
    (3, 9): (
        frozenset({"graphlib", "zoneinfo", "_peg_parser", "_zoneinfo"}),
        frozenset({"_dummy_thread", "dummy_threading"}),
    ),
    (3, 10): (
        frozenset(),
        frozenset({"formatter", "parser", "symbol", "_peg_parser", "_bootlocale"}),
    ),
    (3, 11): (
        frozenset({"tomllib", "_tokenize", "_typing"}),
        frozenset({"binhex"}),
    ),
    (3, 12): (
        frozenset({"_pydatetime", "_pylong", "_wmi"}),
        frozenset({"asynchat", "asyncore", "distutils", "imp", "smtpd"}),
    ),
    (3, 13): (
        frozenset({"_colorize", "_pyrepl", "_interpreters", "_suggestions"}),
        frozenset(
            {
                "aifc", "audioop", "cgi", "cgitb", "chunk", "crypt", "imghdr", "lib2to3",
                "mailcap", "msilib", "nis", "nntplib", "ossaudiodev", "pipes", "sndhdr",
                "spwd", "sunau", "telnetlib", "uu", "xdrlib", "_crypt",
                "_xxsubinterpreters",
            }
        ),
    ),
    (3, 14): (
        frozenset({"annotationlib", "compression", "_zstd"}),
        frozenset(),
    ),
}

SUPPORTED_VERSIONS: tuple[tuple[int, int], ...] = ((3, 8), *sorted(_CHANGES))


def parse_python_version(value: str | None) -> tuple[int, int]:
    """``"3.12"`` -> ``(3, 12)``; ``None`` means the running interpreter."""
    if not value:
        return sys.version_info[:2]
    parts = value.strip().split(".")
    try:
        return int(parts[0]), int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        raise ValueError(f"invalid python version: {value!r}") from None


@lru_cache(maxsize=None)
def stdlib_modules(version: tuple[int, int]) -> frozenset[str]:
    """Top-level standard-library names for *version*.

    Versions older than 3.8 get the 3.8 list; versions newer than the last
    known release get the newest list.
    """
    modules = set(_STDLIB_3_8)
    for release in sorted(_CHANGES):
        if release > version:
            break
        added, removed = _CHANGES[release]
        modules -= removed
        modules |= added
    return frozenset(modules)
