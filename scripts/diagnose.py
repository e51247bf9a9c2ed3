#!/usr/bin/env python3
"""
scripts/diagnose.py
===================
Run a registered diagnosis problem from the command line.

Usage:
    python scripts/diagnose.py problem1
    python scripts/diagnose.py problem_fa --hs b1 r1 --backend dpll
    python scripts/diagnose.py --list

Exit status:
    0  diagnosis ran (conflict, no conflict, or inconclusive)
    1  unknown problem name
    2  the problem itself is unusable (unsupported axiom, invalid input)
"""
import argparse
import logging
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


def main(argv=None) -> int:
    from mbd.version import FRAMEWORK_DESCRIPTION, FRAMEWORK_NAME, __version__

    parser = argparse.ArgumentParser(description=f"{FRAMEWORK_NAME}: {FRAMEWORK_DESCRIPTION}")
    parser.add_argument("problem", nargs="?", default="problem1",
                        help="Registered problem name (default: problem1)")
    parser.add_argument("--hs", nargs="*", default=[],
                        help="Components hypothesised abnormal, e.g. --hs a1 a2")
    parser.add_argument("--backend", choices=["z3", "dpll"], default="z3")
    parser.add_argument("--timeout-ms", type=int, default=None,
                        help="Per-check prover timeout (z3 only)")
    parser.add_argument("--list", action="store_true",
                        help="List registered problems and exit")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--version", action="version",
                        version=f"{FRAMEWORK_NAME} {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    import mbd.problems  # noqa: F401  (registers the example circuits)
    from mbd.core.config import MBDConfig
    from mbd.core.exceptions import InvalidProblemError, UnsupportedAxiomError
    from mbd.core.registry import PROBLEM_CATEGORY, Registry
    from mbd.diagnosis.engine import DiagnosisEngine
    from mbd.diagnosis.report import format_diagnosis_report

    if args.list:
        for name in sorted(Registry.list_all(PROBLEM_CATEGORY)):
            print(name)
        return 0

    try:
        supplier = Registry.get(args.problem, category=PROBLEM_CATEGORY)
    except KeyError as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 1

    config = MBDConfig.for_backend(args.backend)
    if args.timeout_ms is not None:
        config.prover.timeout_ms = args.timeout_ms

    print(f"Running diagnostics on {args.problem} with HS={sorted(args.hs)}..")
    engine = DiagnosisEngine(config=config)
    try:
        result = engine.diagnose_problem(supplier, hypothesis=args.hs)
    except (UnsupportedAxiomError, InvalidProblemError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(format_diagnosis_report(result, problem_name=args.problem, hypothesis=args.hs))
    return 0


if __name__ == "__main__":
    sys.exit(main())
