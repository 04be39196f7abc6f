#!/usr/bin/env python3
"""
mdp: preview a Markdown file in the default browser.

Usage:
  mdp -file README.md                 # render, open, delete after a short wait
  mdp -file README.md -s              # render only; print the HTML path
  mdp -file README.md -t page.html    # custom Jinja2 template
  cat notes.md | mdp                  # read Markdown from stdin

Exit code is 0 on success, 1 on any usage error or failure.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import IO, Mapping, Optional, Sequence

from mdp import __version__
from mdp.config import ENV_TEMPLATE, resolve_template
from mdp.errors import MdpError, UsageError
from mdp.pipeline import FileInput, Source, StreamInput, run

EPILOG = f"""
Environment Variables:
  {ENV_TEMPLATE}
        Path to a default template file. Used when -t is not specified.

Templates receive three variables: title, body (already sanitized HTML)
and filename.

Examples:
  Use the default template:
      mdp -file example.md

  Use a custom template file via flag:
      mdp -file example.md -t /path/to/template.html

  Use a custom template via environment variable:
      export {ENV_TEMPLATE}=/path/to/template.html
      mdp -file example.md

  Skip opening the preview in a browser:
      mdp -file example.md -s

  Read the Markdown from a pipe:
      cat example.md | mdp
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog="mdp",
        description="Render a Markdown file to sanitized HTML and preview it in a browser.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    ap.add_argument("-file", "--file", dest="file", default="", metavar="PATH",
                    help="Markdown file to preview (default: read stdin when piped)")
    ap.add_argument("-s", dest="skip_preview", action="store_true", help="Skip auto preview")
    ap.add_argument("-t", dest="template", default="", metavar="PATH", help="Alternate template file path")
    ap.add_argument("-debug", "--debug", dest="debug", action="store_true", help="Print diagnostics to stderr")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def _read_stream(stream: IO) -> bytes:
    data = getattr(stream, "buffer", stream).read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data


def _select_source(file_arg: str, stdin: Optional[IO]) -> Source:
    if file_arg:
        return FileInput(file_arg)
    if stdin is None or stdin.isatty():
        raise UsageError("no input: pass -file or pipe Markdown on stdin")
    return StreamInput(_read_stream(stdin))


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[IO] = None,
    stdout: Optional[IO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    environ = os.environ if environ is None else environ

    try:
        source = _select_source(args.file, stdin)
    except UsageError as e:
        ap.print_help(sys.stderr)
        print(f"\nmdp: {e}", file=sys.stderr)
        return 1

    template_path = resolve_template(args.template, environ)
    if args.debug:
        print(f"[mdp] input: {args.file or '<stdin>'}", file=sys.stderr)
        print(f"[mdp] template: {template_path or '<default>'}", file=sys.stderr)
        print(f"[mdp] preview: {'skipped' if args.skip_preview else 'enabled'}", file=sys.stderr)

    try:
        run(source, template_path, stdout, skip_preview=args.skip_preview)
    except MdpError as e:
        print(f"mdp: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
