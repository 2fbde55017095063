import sys

from utils.schemas import ChapterReport, RunReport

EXIT_OK = 0
EXIT_FAILED = 1
# Used by the entry script when the check itself could not run.
EXIT_FATAL = 2

PASS_MARK = '✓'
FAIL_MARK = '✗'

def _status(passed: bool) -> str:
    return 'PASS' if passed else 'FAIL'

def _existence_line(chapter: ChapterReport) -> str:
    if not chapter.document_exists:
        return f"{FAIL_MARK} Chapter does not exist"
    if chapter.document_empty:
        return f"{FAIL_MARK} Chapter exists but is empty"
    return f"{PASS_MARK} Chapter exists and has content"

def format_chapter(chapter: ChapterReport) -> list[str]:
    """Report lines for one chapter: existence, one line per concept, verdict."""
    lines = [f"=== {chapter.title} ({chapter.chapter_id}) ===", _existence_line(chapter)]
    for verdict in chapter.verdicts:
        mark = PASS_MARK if verdict.satisfied else FAIL_MARK
        lines.append(f"  {mark} {verdict.concept_name}")
    lines.append(f"Chapter {chapter.chapter_id}: {_status(chapter.passed)}")
    return lines

def format_summary(run_report: RunReport) -> list[str]:
    """The closing summary table followed by the overall verdict."""
    width = max((len(c.chapter_id) for c in run_report.chapters), default=0)
    lines = ["Summary:"]
    for chapter in run_report.chapters:
        coverage = f"{chapter.satisfied_count}/{len(chapter.verdicts)}"
        lines.append(f"  {chapter.chapter_id.ljust(width)}  {_status(chapter.passed)}  {coverage} concepts")
    failed = run_report.failed_chapters()
    if failed:
        lines.append(f"Failed chapters: {', '.join(failed)}")
    lines.append(f"Overall: {_status(run_report.overall_passed)}")
    return lines

def format_run_report(run_report: RunReport) -> list[str]:
    lines = []
    for chapter in run_report.chapters:
        lines.extend(format_chapter(chapter))
        lines.append("")
    lines.extend(format_summary(run_report))
    return lines

def exit_code_for(run_report: RunReport) -> int:
    return EXIT_OK if run_report.overall_passed else EXIT_FAILED

def report(run_report: RunReport, stream=None) -> int:
    """
    Writes the full report and returns the process exit code:
    0 when every chapter passed, 1 otherwise.
    """
    stream = stream if stream is not None else sys.stdout
    for line in format_run_report(run_report):
        print(line, file=stream)
    return exit_code_for(run_report)
