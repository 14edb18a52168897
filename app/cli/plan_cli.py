"""Command-line client for the study planner API."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import requests

from app.config import settings


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _post(args: argparse.Namespace, route: str, payload: dict, params: dict | None = None) -> int:
    url = args.url.rstrip("/") + route
    resp = requests.post(url, json=payload, params=params, timeout=args.timeout)
    if resp.status_code != 200:
        print(f"Error {resp.status_code}: {resp.text}", file=sys.stderr)
        return 1
    data = resp.json()
    if args.markdown and "markdown" in data:
        print(data["markdown"])
    elif args.raw_text and "description" in data:
        print(data["description"])
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def _cmd_decode(args: argparse.Namespace) -> int:
    payload = {"description": _read_text(args.file)}
    if args.title:
        payload["title"] = args.title
    return _post(args, "/study-plans/decode", payload)


def _cmd_encode(args: argparse.Namespace) -> int:
    plan = json.loads(_read_text(args.file))
    return _post(args, "/study-plans/encode", plan, params={"storage": args.storage})


def _cmd_suggestions(args: argparse.Namespace) -> int:
    return _post(args, "/study-suggestions/descriptions", {"raw": _read_text(args.file)})


def _cmd_recommend(args: argparse.Namespace) -> int:
    payload = {"title": args.title, "subject_name": args.subject}
    if args.description_file:
        payload["description"] = _read_text(args.description_file)
    return _post(args, "/study-materials/recommendations", payload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Study planner CLI")
    parser.add_argument(
        "--url",
        default=settings.api_base_url,
        help="Study planner API base URL",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=settings.api_timeout_seconds,
        help="Request timeout in seconds",
    )
    parser.add_argument("--markdown", action="store_true", help="Print rendered Markdown when available")
    parser.add_argument("--raw-text", action="store_true", help="Print the bare description when available")
    sub = parser.add_subparsers(dest="command", required=True)

    decode_p = sub.add_parser("decode", help="Decode a stored description (file or '-')")
    decode_p.add_argument("file")
    decode_p.add_argument("--title")
    decode_p.set_defaults(func=_cmd_decode)

    encode_p = sub.add_parser("encode", help="Encode a JSON study plan (file or '-')")
    encode_p.add_argument("file")
    encode_p.add_argument("--storage", choices=("text", "json"), default="text")
    encode_p.set_defaults(func=_cmd_encode)

    sugg_p = sub.add_parser("suggestions", help="Build descriptions from raw generator JSON")
    sugg_p.add_argument("file")
    sugg_p.set_defaults(func=_cmd_suggestions)

    rec_p = sub.add_parser("recommend", help="Rank study materials for an event")
    rec_p.add_argument("--title", required=True)
    rec_p.add_argument("--subject")
    rec_p.add_argument("--description-file")
    rec_p.set_defaults(func=_cmd_recommend)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except requests.RequestException as exc:
        print(f"Request failed: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Cannot read input: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON input: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
