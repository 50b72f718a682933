"""
4ti2-style command-line runner.

Reads the project files PROJECT.mat, PROJECT.rhs, PROJECT.cost and
(optionally) PROJECT.ub, computes a truncated Gröbner basis of

    max cost·x  s.t.  mat·x <= rhs, 0 <= x <= ub

and writes it to PROJECT.gro.

Usage:
    python -m ipgbs.runners.compute_gb examples/knapsack
    python -m ipgbs.runners.compute_gb examples/knapsack --signatures --module-order pot
    python -m ipgbs.runners.compute_gb examples/knapsack --truncation lp --auto-reduce-freq 0
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from ipgbs.algebra.signatures import ModuleMonomialOrder
from ipgbs.algorithms.config import initialize_parameters
from ipgbs.constraints.instance import InputValidationError
from ipgbs.constraints.truncation import TRUNCATION_TYPES
from ipgbs.core.fourti2_io import read_matrix, read_vector, write_vectors
from ipgbs.core.matrix_types import print_matrix
from ipgbs.runners.groebner import groebner_basis
from ipgbs.solver.lp_solver import SolverStatusError


# Logger for this module
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the Gröbner basis runner.

    Returns:
        Parsed arguments with project, signatures, module_order, truncation,
        auto_reduce_freq, debug and quiet
    """
    parser = argparse.ArgumentParser(
        description="Compute a truncated Gröbner basis of a 4ti2 project."
    )
    parser.add_argument(
        "project",
        type=Path,
        help="Project path without extension (reads PROJECT.mat, .rhs, .cost, .ub)"
    )
    parser.add_argument(
        "--signatures",
        action="store_true",
        help="Use the signature-based algorithm"
    )
    parser.add_argument(
        "--module-order",
        choices=[o.value for o in ModuleMonomialOrder],
        default="ltpot",
        help="Module order of the signature-based algorithm"
    )
    parser.add_argument(
        "--truncation",
        choices=TRUNCATION_TYPES,
        default="heuristic",
        help="Feasibility filter for S-binomials"
    )
    parser.add_argument(
        "--auto-reduce-freq",
        type=int,
        default=5,
        help="Interreduce the basis every N additions (0 disables)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print a trace of every step of the main loop"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print run statistics"
    )
    return parser.parse_args(argv)


def project_file(project: Path, extension: str) -> Path:
    return project.with_name(project.name + extension)


def compute_gb(
    project: Path,
    use_signatures: bool = False,
    module_order: str = "ltpot",
    truncation_type: str = "heuristic",
    auto_reduce_freq: int = 5,
    debug: bool = False,
    quiet: bool = True
) -> List[List[int]]:
    """
    Compute the basis of a 4ti2 project and write PROJECT.gro.

    A missing PROJECT.ub means the bounds are implied by mat·x <= rhs.

    Returns:
        The basis that was written
    """
    logger.info("Reading project files for %s", project)
    A = read_matrix(project_file(project, ".mat"))
    b = read_vector(project_file(project, ".rhs"))
    C = read_matrix(project_file(project, ".cost"), dtype=float)
    ub_path = project_file(project, ".ub")
    u = read_vector(ub_path) if ub_path.exists() else None
    if debug:
        print("Constraint matrix:")
        print_matrix(A)

    config = initialize_parameters(auto_reduce_freq=auto_reduce_freq, debug=debug)
    basis = groebner_basis(
        A, b, C, u,
        use_signatures=use_signatures,
        module_order=module_order,
        truncation_type=truncation_type,
        config=config,
        quiet=quiet,
    )

    width = A.shape[1] * 2 + A.shape[0]
    write_vectors(project_file(project, ".gro"), basis, width=width)
    logger.info("Wrote %d elements to %s", len(basis), project_file(project, ".gro"))
    return basis


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    print("=" * 70)
    print(f"GRÖBNER BASIS: {args.project}")
    print("=" * 70)

    try:
        basis = compute_gb(
            args.project,
            use_signatures=args.signatures,
            module_order=args.module_order,
            truncation_type=args.truncation,
            auto_reduce_freq=args.auto_reduce_freq,
            debug=args.debug,
            quiet=args.quiet,
        )
    except FileNotFoundError as e:
        print(f"[ERROR] Missing project file: {e.filename}")
        return 1
    except (InputValidationError, ValueError) as e:
        print(f"[ERROR] Invalid input: {e}")
        return 1
    except SolverStatusError as e:
        print(f"[ERROR] Solver failure: {e}")
        return 1

    print(f"✓ {len(basis)} elements written to {project_file(args.project, '.gro')}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
