"""Typer CLI: cache an output directory keyed by a dependency spec file's hash."""
from typing import List, Optional

import typer
from typer.core import TyperCommand
from dotenv import load_dotenv

from . import cache, generator
from .config import load_settings
from .errors import DepCacheError, UsageError
from .runner import SubprocessRunner
from .schema import Invocation

# loading variables (CACHE_DIR, PREFIX, ...) from .env file
load_dotenv()

app = typer.Typer(add_completion=False)

# Go-style boolean flags: name -> (flag when true, flag when false)
GO_BOOL_FLAGS = {
    "symlink": ("--symlink", "--no-symlink"),
    "clean": ("--clean", None),
    "f": ("-f", None),
}
GO_TRUE = {"1", "t", "T", "true", "TRUE", "True"}
GO_FALSE = {"0", "f", "F", "false", "FALSE", "False"}
VALUE_OPTIONS = {"--config"}


def normalize_go_flags(args: List[str]) -> List[str]:
    """Rewrite ``-symlink``, ``-symlink=false``, ``-clean``, ``-f=true`` ... into
    their GNU spellings.

    Only tokens before the first positional (or ``--``) are touched; the
    command and its arguments pass through verbatim.
    """
    out: List[str] = []
    i = 0
    while i < len(args):
        tok = args[i]
        if tok == "--" or not tok.startswith("-") or tok == "-":
            return out + args[i:]
        if tok in VALUE_OPTIONS and i + 1 < len(args):
            out.extend(args[i:i + 2])
            i += 2
            continue
        name, sep, value = tok.lstrip("-").partition("=")
        spelling = GO_BOOL_FLAGS.get(name)
        if spelling is not None and (not sep or value in GO_TRUE):
            out.append(spelling[0])
        elif spelling is not None and value in GO_FALSE:
            if spelling[1]:
                out.append(spelling[1])
        else:
            out.append(tok)
        i += 1
    return out


class GoFlagCommand(TyperCommand):
    def parse_args(self, ctx, args):
        return super().parse_args(ctx, normalize_go_flags(list(args)))


HELP = """Caches output directory (OUTPUT_DIR) based on the hash of the dependency
specification file. If the specification changes the output directory
is regenerated using CMD and the ARGS. Useful in CI settings.

Example:

    dep-cache package.json node_modules npm install
"""


@app.command(
    cls=GoFlagCommand,
    help=HELP,
    context_settings={"allow_interspersed_args": False, "help_option_names": ["-h", "--help"]},
)
def run(
    ctx: typer.Context,
    argv: Optional[List[str]] = typer.Argument(
        None, metavar="DEP_SPEC_FILE OUTPUT_DIR CMD [ARGS]...", show_default=False
    ),
    symlink: Optional[bool] = typer.Option(
        None,
        "--symlink/--no-symlink",
        help="Use a symlink instead of copy (-symlink=false also works).  [default: symlink]",
        show_default=False,
    ),
    force: bool = typer.Option(False, "-f", "--force", help="Force remove existing output directory."),
    clean: bool = typer.Option(False, "--clean", help="Clean cache and exit."),
    config: Optional[str] = typer.Option(None, "--config", help="YAML settings file (cache_dir, symlink, prefix)."),
):
    try:
        settings = load_settings(config, symlink=symlink, force=force)
        cache_root = cache.resolve_cache_root(settings.cache_dir, prefix=settings.prefix)

        if clean:
            typer.echo(f'Wiping cache "{cache_root}"')
            cache.wipe(cache_root)
            return

        argv = argv or []
        if len(argv) < 3:
            typer.echo(ctx.get_help(), err=True)
            raise UsageError(
                "please supply both dependency description file, outputdir and the command to generate it"
            )

        invocation = Invocation(
            spec_file=argv[0],
            output_dir=argv[1],
            command=argv[2],
            args=argv[3:],
        )
        generator.execute(settings.model_copy(update={"cache_dir": cache_root}), invocation, SubprocessRunner())
    except DepCacheError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
