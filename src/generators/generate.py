"""
Command-line entry point: print generated test data as JSON.

Usage:
    python -m src.generators.generate
    python -m src.generators.generate --entity BuildType --param my_build_id
"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from src import models
from src.utils.config import ConfigError, load_settings

from .aggregate import AggregateGenerator
from .engine import TestDataGenerator
from .errors import GenerationError
from .schema import is_entity_type


logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate test data entities and print them as JSON",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Generator config YAML (default: config/generator.yaml)",
    )
    parser.add_argument(
        "--entity",
        type=str,
        default=None,
        help="Generate a single entity by class name instead of TestData",
    )
    parser.add_argument(
        "--param",
        type=str,
        action="append",
        default=[],
        help="Parameter for PARAMETER fields, repeatable, in field order",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1

    generator = TestDataGenerator(settings=settings)

    if args.param and not args.entity:
        logger.warning("--param is only used together with --entity, ignoring %d value(s)", len(args.param))

    try:
        if args.entity:
            entity_type = getattr(models, args.entity, None)
            if not is_entity_type(entity_type):
                logger.error("Unknown entity: %s", args.entity)
                return 1
            result = generator.generate(entity_type, *args.param).to_dict()
        else:
            test_data = AggregateGenerator(generator).generate()
            result = {
                name: entity.to_dict()
                for name, entity in vars(test_data).items()
                if entity is not None
            }
    except GenerationError as e:
        logger.error("Generation failed: %s", e)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
