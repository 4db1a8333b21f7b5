#!/usr/bin/env python3
"""
Readiness Gate CLI

Waits for a Deployment or StatefulSet to become fully ready after a rollout.
Exits 0 when ready, 1 on any failure (missing target, zero replicas,
crash-looping or restarting pods, timeout).

Usage:
    readiness-gate check_readiness <kind> <name> <namespace> [timeout]
    python -m readiness_gate check_readiness deployment my-deploy default 300
"""
import argparse
import logging
import os
import sys

from .config import load_settings
from .errors import ReadinessError
from .kubernetes_client import KubernetesClient
from .monitor import ReadinessMonitor
from .validators import parse_timeout, validate_arguments

logger = logging.getLogger(__name__)


def print_colored(text: str, color: str = 'default'):
    """Print with ANSI colors when writing to a terminal."""
    colors = {
        'green': '\033[0;32m',
        'yellow': '\033[1;33m',
        'blue': '\033[0;34m',
        'red': '\033[0;31m',
        'default': '\033[0m',
    }
    reset = '\033[0m'
    if sys.stdout.isatty():
        text = f"{colors.get(color, '')}{text}{reset}"
    print(text, flush=True)


class GateArgumentParser(argparse.ArgumentParser):
    """Reports usage errors like any other failure: one red line, exit 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print_colored(f"✗ Error: {message}", 'red')
        sys.exit(1)


def configure_logging(verbose: bool = False):
    level = 'DEBUG' if verbose else os.environ.get('READINESS_LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )


def cmd_check_readiness(args):
    """Wait for a workload to become ready."""
    ref = validate_arguments(args.kind, args.name, args.namespace)
    timeout = parse_timeout(args.timeout)
    settings = load_settings(
        args.config,
        overrides={
            'timeout': timeout,
            'settle_delay': args.settle_delay,
            'poll_interval': args.interval,
        },
    )

    k8s = KubernetesClient(namespace=ref.namespace, context=args.context)
    monitor = ReadinessMonitor(k8s, settings, echo=lambda line: print_colored(line, 'yellow'))
    monitor.wait_until_ready(ref)
    print_colored(f"✓ {ref.kind} {ref.name} is ready", 'green')


def build_parser() -> argparse.ArgumentParser:
    parser = GateArgumentParser(
        prog='readiness-gate',
        description='Readiness gate for Kubernetes Deployments and StatefulSets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  readiness-gate check_readiness deployment my-deploy default        # Wait up to 500s
  readiness-gate check_readiness statefulset my-db data 300          # Wait up to 300s
  readiness-gate --context staging check_readiness sts my-db data    # Use a kubeconfig context
"""
    )
    parser.add_argument('--context', help='Kubeconfig context to use')
    parser.add_argument('--config', '-c', help='YAML settings file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    # check_readiness
    check_parser = subparsers.add_parser('check_readiness', help='Wait for a workload to become ready')
    check_parser.add_argument('kind', nargs='?', default='', help='deployment or statefulset')
    check_parser.add_argument('name', nargs='?', default='', help='Workload name')
    check_parser.add_argument('namespace', nargs='?', default='', help='Kubernetes namespace')
    check_parser.add_argument('timeout', nargs='?', default=None,
                              help='Timeout in seconds (default: 500)')
    check_parser.add_argument('--settle-delay', type=float, default=None,
                              help='Seconds to wait before the first check (default: 10)')
    check_parser.add_argument('--interval', type=float, default=None,
                              help='Seconds between checks (default: 5)')
    check_parser.set_defaults(func=cmd_check_readiness)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)
    except ReadinessError as e:
        print_colored(f"✗ Error: {e}", 'red')
        sys.exit(1)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print_colored(f"✗ Error: {e}", 'red')
        sys.exit(1)
    sys.exit(0)


if __name__ == '__main__':
    main()
