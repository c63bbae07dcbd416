"""
JobSeeker - CLI Entry Point.

Analyze a resume file from the command line, or serve the API.

Usage:
    python main.py path/to/resume.pdf
    python main.py --serve [--host 0.0.0.0] [--port 8000]
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from jobseeker.agents import ResumeAnalyzer  # noqa: E402
from jobseeker.config import get_settings  # noqa: E402
from jobseeker.errors import ServiceError  # noqa: E402
from jobseeker.repositories.document_store import MIME_DOC, MIME_DOCX, MIME_PDF, MIME_TEXT  # noqa: E402
from jobseeker.tools import extract_text_from_path  # noqa: E402
from jobseeker.utils.logging import configure_logging  # noqa: E402

MIME_BY_SUFFIX = {
    ".pdf": MIME_PDF,
    ".docx": MIME_DOCX,
    ".doc": MIME_DOC,
    ".txt": MIME_TEXT,
}


def analyze_file(path: Path) -> int:
    mime_type = MIME_BY_SUFFIX.get(path.suffix.lower())
    if not path.exists() or mime_type is None:
        print(f"Error: {path} is not a PDF, DOC, DOCX or TXT file", file=sys.stderr)
        return 1

    settings = get_settings()
    analyzer = ResumeAnalyzer.from_settings(settings)

    print(f"Loading resume: {path}", file=sys.stderr)
    try:
        text = extract_text_from_path(str(path), mime_type)
        print(f"Extracted {len(text)} chars", file=sys.stderr)
        result = analyzer.analyze(text)
    except ServiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(
        {
            "skills": result.skill_categories(),
            "summary": result.summary,
            "jobKeywords": result.job_keywords,
        },
        indent=2,
    ))
    return 0


def serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("jobseeker.api.app:create_app", factory=True, host=host, port=port)
    return 0


def main() -> int:
    """Run the JobSeeker CLI."""
    parser = argparse.ArgumentParser(description="JobSeeker resume analysis")
    parser.add_argument("file", nargs="*", help="Resume file to analyze")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    configure_logging(get_settings().log_level)

    if args.serve:
        return serve(args.host, args.port)
    if not args.file:
        parser.print_help()
        return 1
    # Join all args for filenames with spaces
    return analyze_file(Path(" ".join(args.file)))


if __name__ == "__main__":
    sys.exit(main())
