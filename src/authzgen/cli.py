"""
authzgen command line interface.

Generates security policy fixtures and writes them as a multi-document
YAML stream.

Usage:
    authzgen --numPolicies 3 --action ALLOW --when 2 --to 1 --from 0
"""

from __future__ import annotations

from typing import Iterator, List, Mapping, Optional, TextIO
import argparse
import logging
import sys

import yaml
from rich.console import Console
from rich.markup import escape

from authzgen import __version__
from authzgen.config import (
    DEFAULT_ACTION,
    DEFAULT_NAMESPACE,
    DEFAULT_NUM_POLICIES,
    DEFAULT_OCCURRENCE,
    DEFAULT_POLICY_TYPE,
    GeneratorConfig,
    env_options,
)
from authzgen.errors import AuthzGenError
from authzgen.policy import build_rule_options, create_policy_header, create_rules

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "---"


def generate_policies(config: GeneratorConfig) -> Iterator[str]:
    """
    Yield one rendered policy document per requested policy.

    Policies are generated one at a time; the first error stops the batch.
    """
    for i in range(1, config.num_policies + 1):
        header = create_policy_header(config.namespace, config.policy_name(i), config.policy_kind)
        rule_options = build_rule_options(config.rule_occurrences)
        yield create_rules(config.action, rule_options, header)


def write_policies(config: GeneratorConfig, stream: TextIO) -> int:
    """
    Write policy documents to ``stream``, separated by ``---`` lines.

    Returns:
        Number of documents written
    """
    written = 0
    for document in generate_policies(config):
        if written:
            stream.write(f"{DOCUMENT_SEPARATOR}\n")
        stream.write(document)
        written += 1
        logger.info(f"Generated policy {written}/{config.num_policies}")
    return written


def build_arg_parser(env: Optional[Mapping[str, str]] = None) -> argparse.ArgumentParser:
    """Build the flag parser. ``env`` holds raw AUTHZGEN_* values used as defaults."""
    env = env or {}
    parser = argparse.ArgumentParser(
        prog="authzgen",
        description="Generate Istio security policy fixtures for benchmarks.",
    )
    parser.add_argument(
        "-namespace", "--namespace",
        default=env.get("namespace", DEFAULT_NAMESPACE),
        help="Namespace in which the rule shall be applied to.",
    )
    parser.add_argument(
        "-policyType", "--policyType",
        dest="policy_type",
        default=env.get("policy_type", DEFAULT_POLICY_TYPE.value),
        help="The type of security policy. Supported value: AuthorizationPolicy",
    )
    parser.add_argument(
        "-action", "--action",
        default=env.get("action", DEFAULT_ACTION.value),
        help="Type of action. Supported values: DENY, ALLOW",
    )
    parser.add_argument(
        "-numPolicies", "--numPolicies",
        dest="num_policies",
        type=int,
        default=env.get("num_policies", DEFAULT_NUM_POLICIES),
        help="Number of policies wanted",
    )
    parser.add_argument(
        "-when", "--when",
        type=int,
        default=DEFAULT_OCCURRENCE,
        help="Number of when condition wanted",
    )
    parser.add_argument(
        "-to", "--to",
        type=int,
        default=DEFAULT_OCCURRENCE,
        help="Number of To operations wanted",
    )
    parser.add_argument(
        "-from", "--from",
        dest="from_",
        type=int,
        default=DEFAULT_OCCURRENCE,
        help="Number of From sources wanted",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write policies to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    console = Console(stderr=True)

    args = build_arg_parser(env_options()).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = GeneratorConfig.from_options(
            namespace=args.namespace,
            policy_type=args.policy_type,
            action=args.action,
            num_policies=args.num_policies,
            rule_occurrences={"when": args.when, "to": args.to, "from": args.from_},
        )
        if args.output:
            with open(args.output, "w", encoding="utf-8") as fh:
                written = write_policies(config, fh)
        else:
            written = write_policies(config, sys.stdout)
    except (AuthzGenError, yaml.YAMLError, ValueError) as e:
        logger.debug("Policy generation failed", exc_info=True)
        console.print(f"[red]error:[/red] {escape(str(e))}", highlight=False)
        return 1

    logger.info(f"Wrote {written} policies")
    return 0


if __name__ == "__main__":
    sys.exit(main())
