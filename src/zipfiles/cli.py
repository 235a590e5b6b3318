# src/zipfiles/cli.py
import sys
import argparse
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn

# Module imports
from zipfiles.core.cancellation import CancellationToken
from zipfiles.core.patterns import literal_at_any_depth
from zipfiles.core.pipeline import zip_files
from zipfiles.core.settings import load_config_file, project_config_path, resolve_config, user_config_path
from zipfiles.core.summary import estimate_tokens, format_report
from zipfiles.errors import CancelledError, EmptySelectionError, ReadError
from zipfiles.models import AggregationResult, Configuration, Phase, ProgressEvent

EXIT_CANCELLED = 130

def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="zipfiles",
        description="Combine the text of selected files into a single blob, ready to paste into an LLM chat."
    )
    parser.add_argument("paths", type=str, nargs="*", help="Files and/or directories to combine (default: --base)")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the combined text to this file instead of stdout"
    )
    parser.add_argument(
        "--base",
        type=str,
        default=os.getcwd(),
        help="Workspace root: holds .zipfilesrc and anchors relative paths (default: current directory)"
    )
    parser.add_argument("--config", type=str, default=None, help="User settings JSON file (default: ~/.config/zipfiles/settings.json)")
    parser.add_argument("--no-comments", action="store_true", help="Do not prefix each file with a '// path' line")
    parser.add_argument("-j", "--jobs", type=int, default=None, help="Number of concurrent reads")
    parser.add_argument("--tokens", action="store_true", help="Include an estimated token count in the report")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress and report output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser

def load_configuration(base_dir: Path, user_config: Optional[str] = None) -> Configuration:
    """Project .zipfilesrc > user settings > built-in defaults."""
    project = load_config_file(project_config_path(base_dir))
    user_path = Path(user_config).expanduser() if user_config else user_config_path()
    user = load_config_file(user_path)
    return resolve_config(project=project, user=user)

class ProgressDisplay:
    """Renders the ProgressEvent stream as one rich progress bar per phase."""

    LABELS = {
        Phase.DISCOVERING: "[cyan]Finding files...",
        Phase.READING: "[cyan]Processing files...",
        Phase.FINALIZING: "[cyan]Finalizing...",
    }

    def __init__(self, console: Optional[Console] = None):
        self.progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console or Console(stderr=True),
            redirect_stdout=False,
            redirect_stderr=False,
        )
        self.tasks: Dict[Phase, TaskID] = {}

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, *exc_info):
        self.progress.stop()

    def __call__(self, event: ProgressEvent) -> None:
        task_id = self.tasks.get(event.phase)
        if task_id is None:
            task_id = self.progress.add_task(self.LABELS[event.phase], total=event.total)
            self.tasks[event.phase] = task_id
        self.progress.update(task_id, completed=event.processed, total=event.total)

def run_with_cancellation(
    roots: List[Path],
    config: Configuration,
    base_dir: Path,
    progress: Optional[ProgressDisplay],
    jobs: Optional[int],
) -> AggregationResult:
    """
    Runs the pipeline on a worker thread so Ctrl-C can signal the
    cancellation token instead of tearing down the reads. Further Ctrl-C
    presses while the run winds down are ignored.
    """
    token = CancellationToken()
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(
            zip_files, roots, config,
            bases=[base_dir], on_progress=progress, cancellation=token, max_workers=jobs,
        )
        try:
            return future.result()
        except KeyboardInterrupt:
            token.cancel()
        while True:
            try:
                return future.result()
            except KeyboardInterrupt:
                continue

def main(argv: Optional[List[str]] = None):
    # 1. Setup
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    base_dir = Path(os.path.abspath(args.base))
    if not base_dir.is_dir():
        print(f"Error: Invalid base directory '{base_dir}'", file=sys.stderr)
        sys.exit(1)

    if args.jobs is not None and args.jobs < 1:
        print("Error: --jobs must be at least 1", file=sys.stderr)
        sys.exit(1)

    roots = [Path(p) for p in args.paths] or [base_dir]
    output_file = Path(os.path.abspath(args.output)) if args.output else None

    # 2. Configuration
    config = load_configuration(base_dir, args.config)
    if args.no_comments:
        config = replace(config, annotate=False)
    if output_file is not None:
        # Never feed a previous run's output back in
        config = replace(config, exclude_patterns=config.exclude_patterns + (literal_at_any_depth(output_file.name),))

    # 3. Run
    try:
        if args.quiet:
            result = run_with_cancellation(roots, config, base_dir, None, args.jobs)
        else:
            with ProgressDisplay() as progress:
                result = run_with_cancellation(roots, config, base_dir, progress, args.jobs)
    except EmptySelectionError:
        print("No matching files found.", file=sys.stderr)
        return
    except CancelledError:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(EXIT_CANCELLED)
    except ReadError as e:
        print(f"\nError: Failed to combine code files: {e}", file=sys.stderr)
        sys.exit(1)

    # 4. Output
    if output_file is not None:
        try:
            output_file.write_text(result.combined_text, encoding="utf-8")
        except OSError as e:
            print(f"Error writing file: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        sys.stdout.write(result.combined_text)
        sys.stdout.flush()

    # 5. Report
    if not args.quiet:
        summary = result.summary
        if args.tokens:
            summary = replace(summary, estimated_tokens=estimate_tokens(result.combined_text))
        print(format_report(summary), file=sys.stderr)
        if result.warnings:
            print(f"Skipped {len(result.warnings)} unreadable path(s).", file=sys.stderr)
        if output_file is not None:
            print(f"Success! Combined text written to: {output_file}", file=sys.stderr)

if __name__ == "__main__":
    main()
