import argparse
import asyncio
import json
import sys
from pathlib import Path

from docbrief.config.settings import Settings
from docbrief.intake.file_loader import FileLoader
from docbrief.intake.models import DocumentKind
from docbrief.logging.logger import Log
from docbrief.processor.models import ProcessingPhase
from docbrief.processor.processor import IntakeProcessor, build_processor
from docbrief.usage.fingerprint import get_fingerprint
from docbrief.validation.messages import message_for
from docbrief.validation.models import TextValidationWarning

STDIN_ARGUMENT = "-"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docbrief",
        description="Explain a contract or offer letter.",
    )
    parser.add_argument(
        "file",
        type=Path,
        help="PDF or DOCX document to analyze, or '-' to read pasted text from stdin",
    )
    parser.add_argument(
        "--offer-letter",
        dest="document_kind",
        action="store_const",
        const=DocumentKind.OFFER_LETTER,
        default=DocumentKind.CONTRACT,
        help="explain the document as a job offer letter",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="continue without asking when the document does not look like a contract",
    )
    return parser.parse_args(argv)


def _confirm(warning: TextValidationWarning) -> bool:
    print(message_for(warning))
    answer = input("Continue anyway? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def _select(processor: IntakeProcessor, source: Path) -> bool:
    if str(source) == STDIN_ARGUMENT:
        return processor.select_text(sys.stdin.read()) is None
    file = FileLoader().load(source)
    return processor.select_file(file) is None


async def run(processor: IntakeProcessor, source: Path, *, assume_yes: bool) -> int:
    """Drive one document through the processor. Returns a process exit code."""
    if not _select(processor, source):
        print(processor.store.error, file=sys.stderr)
        return 2

    session = await processor.process()
    if session.phase is ProcessingPhase.AWAITING_OVERRIDE:
        warning = session.validation.warning if session.validation else None
        if assume_yes or (warning is not None and _confirm(warning)):
            session = await processor.continue_anyway()
        else:
            processor.cancel_override()
            return 1

    if session.phase is not ProcessingPhase.SUCCEEDED:
        print(session.error_message, file=sys.stderr)
        return 1

    analysis = processor.store.analysis
    if analysis is not None:
        if analysis.is_wrong_document_type:
            print(f"Note: this does not look like a {processor.document_kind.label}.")
        print(json.dumps(analysis.analysis, indent=2))
    if session.complexity is not None:
        print(f"Complexity: {session.complexity.value}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point: load settings -> build processor -> process one document."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    processor = build_processor(
        settings,
        document_kind=args.document_kind,
        identity_token=get_fingerprint(),
    )
    try:
        code = asyncio.run(run(processor, args.file, assume_yes=args.yes))
    except FileNotFoundError as exc:
        Log.error(str(exc))
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
