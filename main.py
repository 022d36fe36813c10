#!/usr/bin/env python3
"""
Taxonomist - Markdown Content Indexer

Main entry point for Taxonomist. Imports content, indexes it and prints the
taxonomy tree, the content tree or a single entity as JSON.
"""

import json
import logging
import sys
import argparse

from taxonomist.config import ConfigManager, ConfigurationError, StartupConfig, validate_startup_config
from taxonomist.importers import BaseImporter, FileSystemImporter, MockImporter
from taxonomist.index import ContentIndex


def setup_logging(config: ConfigManager):
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def create_importer(importer_type: str, config: ConfigManager, startup: StartupConfig,
                    root_path: str | None = None) -> BaseImporter:
    """
    Create the importer selected on the command line.

    Args:
        importer_type: "mock" or "filesystem"
        config: Loaded configuration
        startup: Validated startup configuration
        root_path: Content root overriding the configured one

    Returns:
        The importer instance
    """
    if importer_type == "mock":
        return MockImporter()

    return FileSystemImporter(
        root_path=root_path or startup.root_path,
        static_assets_folder_name=startup.static_assets_folder_name,
        index_file_name=config.index_file_name,
        file_extensions=config.file_extensions
    )


def run_index(args, config: ConfigManager, startup: StartupConfig) -> str:
    """
    Index the selected content and render the requested view.

    Returns:
        JSON text for the requested tree or entity
    """
    index = ContentIndex(startup.cache_context())
    importer = create_importer(args.importer, config, startup, args.root)
    index.save_all(importer.get_all_items())

    if args.slug:
        # Build the content tree first so the entity carries its navigation
        index.get_content_tree()
        entity = index.get_by_slug(args.slug)
        if entity is None:
            logging.warning(f"No entity found for slug {args.slug}")
            return json.dumps(None)
        return entity.model_dump_json(indent=2)

    if args.tree == "taxonomy":
        return index.get_taxonomy_tree().model_dump_json(indent=2)

    tree = index.get_content_tree(args.root_slug)
    if tree is None:
        logging.warning(f"No taxonomy found for slug {args.root_slug}")
        return json.dumps(None)
    return tree.model_dump_json(indent=2)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Taxonomist - Markdown Content Indexer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                   # Print the content tree of the mock content
  python main.py --importer filesystem --root ./content --tree taxonomy
  python main.py --importer filesystem --root-slug /blog
  python main.py --slug /blog/my-new-project       # Print one item with its navigation
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to the configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--importer",
        choices=["mock", "filesystem"],
        default="mock",
        help="Content importer to use (default: mock)"
    )

    parser.add_argument(
        "--root",
        type=str,
        help="Content root directory, overriding content.root_path"
    )

    parser.add_argument(
        "--tree",
        choices=["taxonomy", "content"],
        default="content",
        help="Tree to print (default: content)"
    )

    parser.add_argument(
        "--root-slug",
        type=str,
        default="/",
        help="Print only the content subtree under this taxonomy"
    )

    parser.add_argument(
        "--slug",
        type=str,
        help="Print a single entity instead of a tree"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Taxonomist 0.1.0"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    config = ConfigManager(args.config)
    setup_logging(config)

    try:
        startup = validate_startup_config(config)
    except ConfigurationError as e:
        logging.error(f"Invalid configuration: {e}")
        print(f"\nInvalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        print(run_index(args, config, startup))

    except FileNotFoundError as e:
        logging.error(f"Indexing failed: {e}")
        print(f"\nIndexing failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
