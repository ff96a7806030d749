# ------------------------------------------------------------
# Module: completion_client/cli.py
# Purpose: CLI to send one completion request (one-shot or streamed) and print the result.
# ------------------------------------------------------------

from __future__ import annotations

import argparse
import sys

import requests

from completion_client.client.completion_client import CompletionEndpoint
from completion_client.client.protocols import CompletionClient
from completion_client.core.config import settings_from_env
from completion_client.core.logging import configure_logging
from completion_client.errors import CompletionError
from completion_client.models import CompletionRequest


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="completion-client",
        description="Complete a prompt against the configured completions API.",
    )
    ap.add_argument("prompt", help="Prompt text to complete.")
    ap.add_argument("--engine", help="Engine name. Defaults to COMPLETION_ENGINE / settings.")
    ap.add_argument("--max-tokens", type=int, dest="max_tokens")
    ap.add_argument("--temperature", type=float)
    ap.add_argument("--top-p", type=float, dest="top_p")
    ap.add_argument("-n", type=int, dest="n", help="Number of choices to request.")
    ap.add_argument("--stop", action="append", help="Stop sequence (repeatable).")
    ap.add_argument("--echo", action="store_true", default=None)
    ap.add_argument("--stream", action="store_true", help="Print text as it streams in.")
    ap.add_argument("--log-level", dest="log_level", help="Override COMPLETION_LOG_LEVEL.")
    return ap


def request_from_args(args: argparse.Namespace) -> CompletionRequest:
    return CompletionRequest(
        prompt=args.prompt,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
        top_p=args.top_p,
        n=args.n,
        stop=args.stop,
        echo=args.echo,
    )


def run(client: CompletionClient, args: argparse.Namespace, out=None) -> int:
    """Execute one call and write the generated text to `out`; returns choices seen."""
    out = out or sys.stdout
    request = request_from_args(args)

    if args.stream:
        seen = 0

        def _print(result):
            nonlocal seen
            for choice in result.completions:
                out.write(choice.text)
                seen += 1
            out.flush()

        client.stream_completion_to(_print, request, engine=args.engine)
        out.write("\n")
        return seen

    result = client.create_completion(request, engine=args.engine)
    for choice in result.completions:
        out.write(f"{choice}\n" if len(result.completions) > 1 else f"{choice.text}\n")
    return len(result.completions)


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    settings = settings_from_env(LOG_LEVEL=args.log_level)
    configure_logging(settings)

    # Library errors end the process with a one-line message; no retry here.
    with CompletionEndpoint.from_settings(settings) as client:
        try:
            run(client, args)
        except CompletionError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        except requests.RequestException as e:
            print(f"error: request failed: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
