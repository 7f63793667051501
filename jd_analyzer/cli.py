"""
JD Analyzer CLI - Command line interface for skill extraction and matching.

Usage:
    python -m jd_analyzer.cli [command] [options]

Commands:
    extract     Extract text from a PDF, DOCX or TXT document
    skills      Extract the skill set of a document
    match       Rank CVs against a job description
    config      Manage configuration

Examples:
    python -m jd_analyzer.cli extract resume.pdf
    python -m jd_analyzer.cli skills job.docx --json
    python -m jd_analyzer.cli match --job job.txt --cv alice.pdf --cv bob.docx --top 3
    python -m jd_analyzer.cli config --set analysis.max_workers 8
"""

from pathlib import Path
import argparse
import json
import sys

from jd_analyzer.core.analyzer import DocumentAnalyzer
from jd_analyzer.core.exceptions import JDAnalyzerError
from jd_analyzer.core.models import ExtractionAdvisory
from jd_analyzer.utils import Config, configure_logging


ADVISORY_MESSAGES = {
    ExtractionAdvisory.FAILED: (
        "⚠️  PDF processing failed: no skills could be extracted.\n"
        "    The PDF may be scanned, encrypted or use non-standard fonts.\n"
        "    For best results, use a .txt or .docx version of the document."
    ),
    ExtractionAdvisory.PARTIAL: (
        "⚠️  PDF partially processed: extraction may be incomplete.\n"
        "    Verify the skills below and consider a .txt or .docx version."
    ),
}


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="JD Analyzer - Skill extraction and candidate matching",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Extract command
    extract_parser = subparsers.add_parser("extract", help="Extract text from a document")
    extract_parser.add_argument("file", help="Path to a .pdf, .docx or .txt file")
    extract_parser.add_argument("--output", "-o", help="Write extracted text to this file")

    # Skills command
    skills_parser = subparsers.add_parser("skills", help="Extract skills from a document")
    skills_parser.add_argument("file", help="Path to a .pdf, .docx or .txt file")
    skills_parser.add_argument("--json", action="store_true", help="Print as JSON")

    # Match command
    match_parser = subparsers.add_parser("match", help="Rank CVs against a job description")
    match_parser.add_argument("--job", "-j", required=True, help="Path to the job description")
    match_parser.add_argument("--cv", action="append", required=True, help="Path to a CV (repeatable)")
    match_parser.add_argument("--top", "-t", type=int, help="Show top N candidates")
    match_parser.add_argument("--output", "-o", help="Write match reports to a JSON file")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a config value")
    config_parser.add_argument("--init", action="store_true", help="Initialize default config")

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        # Load configuration
        config = Config(args.config)
        configure_logging("DEBUG" if args.verbose else config.get_log_level())

        # Execute command
        if args.command == "extract":
            cmd_extract(args, config)
        elif args.command == "skills":
            cmd_skills(args, config)
        elif args.command == "match":
            cmd_match(args, config)
        elif args.command == "config":
            cmd_config(args, config)
        else:
            parser.print_help()

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def _read(path: str) -> tuple[bytes, str]:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return file_path.read_bytes(), file_path.name


def cmd_extract(args, config: Config):
    """Execute extract command."""
    data, filename = _read(args.file)
    analyzer = DocumentAnalyzer(config)
    extracted = analyzer.text_extractor.extract(data, filename)

    if args.output:
        Path(args.output).write_text(extracted.text, encoding="utf-8")
        print(f"💾 Saved {len(extracted.text)} chars to {args.output}")
    else:
        print(extracted.text)

    strategy = f" via {extracted.strategy}" if extracted.strategy else ""
    print(f"\n📄 {filename}: {extracted.recovery_quality.value} recovery{strategy}", file=sys.stderr)


def cmd_skills(args, config: Config):
    """Execute skills command."""
    data, filename = _read(args.file)
    analyzer = DocumentAnalyzer(config)
    document = analyzer.analyze_document(data, filename)

    if args.json:
        print(json.dumps(document.to_dict(), indent=config.get("output.indent", 2)))
        return

    print(f"🔍 Skills in {filename}:\n")
    if document.advisory in ADVISORY_MESSAGES:
        print(ADVISORY_MESSAGES[document.advisory])
        print()

    if not document.skills:
        print("   (none found)")
        return

    print(f"📋 {len(document.skills)} skills found")
    print(f"   {', '.join(document.skills)}")


def cmd_match(args, config: Config):
    """Execute match command."""
    print("🎯 Matching CVs against job description...")

    analyzer = DocumentAnalyzer(config)

    data, filename = _read(args.job)
    job = analyzer.analyze_document(data, filename, document_id=filename)
    print(f"   Job: {filename} ({len(job.skills)} required skills)")
    if job.advisory in ADVISORY_MESSAGES:
        print(ADVISORY_MESSAGES[job.advisory])

    cvs = []
    for path in args.cv:
        data, filename = _read(path)
        try:
            cvs.append(analyzer.analyze_document(data, filename, document_id=filename))
        except JDAnalyzerError as e:
            print(f"   ❌ Skipping {filename}: {e}")

    print(f"   CVs to match: {len(cvs)}")

    top = args.top if args.top is not None else config.get_top_candidates()
    ranked = analyzer.rank(job, cvs, top=top)

    print(f"\n📊 Top {len(ranked)} Candidates:\n")
    print("-" * 80)

    for i, report in enumerate(ranked, 1):
        print(f"\n{i}. {report.candidate_set_id}")
        print(f"   📈 Match Score: {report.match_score_percent}%")
        print(f"   ✅ Matched Skills: {', '.join(report.matched_skills) or '-'}")
        if report.skill_gaps:
            print(f"   ❌ Skill Gaps: {', '.join(report.skill_gaps)}")
        if report.bonus_skills:
            print(f"   ➕ Related Skills: {', '.join(report.bonus_skills)}")

    if args.output:
        with open(args.output, 'w') as f:
            json.dump([r.to_dict() for r in ranked], f, indent=config.get("output.indent", 2))
        print(f"\n💾 Saved {len(ranked)} reports to {args.output}")


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config = Config.create_default_config(args.config)
        print(f"✅ Created default config at {config.config_path}")

    if args.set:
        key, value = args.set
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass
        config.set(key, value)
        config.save()
        print(f"✅ Set {key} = {value}")

    if args.show or not (args.init or args.set):
        config.print_config()


if __name__ == "__main__":
    main()
