import argparse
from pathlib import Path

from ..config.loader import build_options, load_defaults
from ..config.options import DIAGRAM_TYPES, OUTPUT_FORMATS
from ..core.errors import DomainModelError
from ..core.pipeline.generate_diagram import generate_diagram
from ..runtime.paths import normalize_module_path
from ..utils.logging import setup_logger


def _parse_list(s: str):
    if not s:
        return None
    parts = [p.strip() for p in s.split(",") if p.strip()]
    return parts or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domain-model-generator",
        description="Generate a class or entity-relationship diagram from the types of a Python module or descriptor file.",
    )
    parser.add_argument("module_path", help="Dotted module name, path to a .py file, or a .yml/.json descriptor file")
    parser.add_argument(
        "--output",
        help="Output file (defaults to <module stem>.mmd/.md/.json in the current directory)",
        default=None,
    )
    parser.add_argument("--diagram-type", choices=list(DIAGRAM_TYPES), default=None, help="Diagram type (default: class)")
    parser.add_argument("--output-format", choices=list(OUTPUT_FORMATS), default=None, help="Output format (default: mermaid)")
    parser.add_argument(
        "--include-self-references",
        action="store_true",
        default=None,
        help="Keep edges from a type to itself",
    )
    parser.add_argument(
        "--snake-case-keys",
        action="store_true",
        default=None,
        help="Also treat `customer_id` style members as keys of `Customer`",
    )
    parser.add_argument(
        "--identifier-types",
        default="",
        help="Comma-separated primitive type names treated as opaque keys, e.g. 'UUID,Guid'",
    )
    parser.add_argument("--json-artifact", default=None, help="Also write the graph as JSON to this path")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--log-level", default=None, help="Log level (INFO/DEBUG/WARN/ERROR)")
    parser.add_argument("--quiet", action="store_true", help="No console logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        module_path = normalize_module_path(args.module_path)
    except ValueError as e:
        raise SystemExit(str(e))

    pkg_root = Path(__file__).resolve().parents[1]  # domain_model_generator/
    defaults = load_defaults(pkg_root)

    logger = setup_logger(
        Path(args.log_file) if args.log_file else None,
        level=args.log_level or defaults.get("log_level") or "INFO",
        quiet=args.quiet,
    )

    try:
        options = build_options(
            module_path,
            defaults,
            {
                "output": args.output,
                "diagram_type": args.diagram_type,
                "output_format": args.output_format,
                "include_self_references": args.include_self_references,
                "snake_case_keys": args.snake_case_keys,
                "identifier_types": _parse_list(args.identifier_types),
            },
        )
        logger.info("Starting reflection")
        logger.info("Input: %s", args.module_path)
        logger.info("Output: %s (%s, %s)", options.generate_options.output_path,
                    options.generate_options.diagram_type, options.generate_options.output_format)
        generate_diagram(options, log=logger, json_artifact=args.json_artifact)
    except DomainModelError as e:
        logger.error("%s", e)
        raise SystemExit(f"domain-model-generator: {e}")

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
