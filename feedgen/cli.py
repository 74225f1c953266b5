import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .build_calendar import render, write_calendar
from .catalog import DuplicateEventError, build_catalog
from .colors import cyan, green
from .events import ClockError, capture_now
from .logs import default_log_path, follow, stream
from .plugin_config import (
    build_config, display_command, local_feed_url, plugin_command, plugin_path, redact,
)
from .settings import Settings

log = logging.getLogger(__name__)

PASSTHROUGH = {"build", "run", "test"}


def _call(argv: Sequence[str], env: Optional[dict] = None) -> None:
    log.debug("exec %s", " ".join(argv))
    try:
        proc = subprocess.run(list(argv), env=env)
    except FileNotFoundError:
        raise SystemExit(f"{argv[0]}: command not found")
    if proc.returncode != 0:
        raise SystemExit(proc.returncode)


def generate(no_utc: bool = False, no_all_day: bool = False, token: Optional[str] = None,
             allow_duplicates: bool = False) -> bytes:
    try:
        now = capture_now()
    except ClockError as e:
        raise SystemExit(f"Cannot generate feed: {e}")
    catalog = build_catalog(include_utc=not no_utc, include_all_day=not no_all_day)
    try:
        return render(now, catalog, token=token, check_duplicates=not allow_duplicates)
    except DuplicateEventError as e:
        raise SystemExit(f"Cannot generate feed: {e}")


def _write_stdout(payload: bytes) -> None:
    sys.stdout.flush()
    buf = getattr(sys.stdout, "buffer", None)
    if buf is None:
        sys.stdout.write(payload.decode("utf-8"))
    else:
        buf.write(payload)
        buf.flush()


def cmd_gen(args, settings: Settings) -> int:
    payload = generate(args.no_utc, args.no_all_day, args.token, args.allow_duplicates)
    if not args.outfile or args.outfile == "-":
        _write_stdout(payload)
        return 0
    out = write_calendar(Path(args.outfile), payload)
    print(f"{green('Generated:', bold=True)} {out}")
    return 0


def cmd_serve(args, settings: Settings) -> int:
    import uvicorn  # lazy import

    port = args.port or settings.test_port
    out = write_calendar(settings.output_path, generate())
    print(f"{green('Generated:', bold=True)} {out}")
    print(f"{cyan('Serving:', bold=True)} http://localhost:{port}/{out.name}")
    print(f"{cyan('Run:', bold=True)} zj-cal-dev run -t")
    uvicorn.run("server.app:app", host=args.host, port=port, log_level=settings.log_level.lower())
    return 0


def cmd_logs(args, settings: Settings) -> int:
    path = Path(args.path) if args.path else default_log_path()
    label = "all logs" if args.all else "zj-cal logs"
    if not path.is_file():
        raise SystemExit(f"No log file at {path}")
    print(f"{cyan(f'Streaming {label} from:', bold=True)}\n  {path}", flush=True)
    try:
        stream(follow(path), sys.stdout, show_all=args.all)
    except KeyboardInterrupt:
        pass
    return 0


def _config_for(args, settings: Settings) -> str:
    ics_url = local_feed_url(settings.test_port) if args.test else settings.ics_url
    return build_config(ics_url, args.configuration)


def cmd_config(args, settings: Settings) -> int:
    print(redact(_config_for(args, settings)))
    return 0


def cmd_build(args, settings: Settings) -> int:
    _call(["cargo", "build", *args.extra])
    return 0


def cmd_run(args, settings: Settings) -> int:
    env = dict(os.environ)
    env["ZJ_CAL_DEBUG_ICS"] = "1" if args.test else ""
    _call(["cargo", "build"], env=env)

    config = _config_for(args, settings)
    path = plugin_path(settings.root)
    print(f"{cyan('Running:', bold=True)}\n  {display_command(config, path, args.extra)}", flush=True)
    _call(plugin_command(config, path, args.extra))
    return 0


def native_target() -> str:
    try:
        proc = subprocess.run(["rustc", "-vV"], capture_output=True, text=True, check=True)
    except (FileNotFoundError, subprocess.CalledProcessError) as e:
        raise SystemExit(f"Cannot query rustc for the host target: {e}")
    for line in proc.stdout.splitlines():
        if line.startswith("host:"):
            return line.split(":", 1)[1].strip()
    raise SystemExit("rustc -vV reported no host target")


def cmd_test(args, settings: Settings) -> int:
    target = native_target()
    print(f"{cyan('Target:', bold=True)} {target}", flush=True)
    _call(["cargo", "test", "--target", target, *args.extra])
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="zj-cal-dev",
        description="Development helpers for the zj-cal plugin: test feed generation, fixture server, logs.",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    g = sub.add_parser("gen", help="Generate the test .ics feed")
    g.add_argument("--outfile", type=str, default=None, help="Output .ics path (default: stdout)")
    g.add_argument("--no-utc", action="store_true", help="Leave out timed UTC events")
    g.add_argument("--no-all-day", action="store_true", help="Leave out all-day events")
    g.add_argument("--token", type=str, default=None, help="Fixed UID token (default: random)")
    g.add_argument("--allow-duplicates", action="store_true",
                   help="Skip the duplicate (kind, offset) check")
    g.set_defaults(func=cmd_gen)

    s = sub.add_parser("serve", help="Generate the feed and serve it on localhost")
    s.add_argument("--port", type=int, default=None, help="Port (default: ZJ_CAL_TEST_PORT or 8088)")
    s.add_argument("--host", type=str, default="127.0.0.1")
    s.set_defaults(func=cmd_serve)

    lg = sub.add_parser("logs", help="Stream plugin logs")
    lg.add_argument("-a", "--all", action="store_true", help="Show all zellij logs, not just zj-cal")
    lg.add_argument("--path", type=str, default=None, help="Log file (default: zellij's log)")
    lg.set_defaults(func=cmd_logs)

    for name, func, text in (
        ("config", cmd_config, "Print the (redacted) plugin config string"),
        ("run", cmd_run, "Build and run the plugin in debug mode"),
    ):
        p = sub.add_parser(name, help=text)
        p.add_argument("-t", "--test", action="store_true",
                       help="Use the local test feed (requires `serve`)")
        p.add_argument("-c", "--configuration", type=str, default=None,
                       help='Extra plugin config, e.g. "foo=bar"')
        p.set_defaults(func=func)

    b = sub.add_parser("build", help="cargo build (extra args passed through)")
    b.set_defaults(func=cmd_build)
    t = sub.add_parser("test", help="cargo test on the native target")
    t.set_defaults(func=cmd_test)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args, extra = ap.parse_known_args(argv)
    if extra and args.command not in PASSTHROUGH:
        ap.error(f"unrecognized arguments: {' '.join(extra)}")
    args.extra = extra

    settings = Settings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
