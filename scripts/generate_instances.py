#!/usr/bin/env python3
import argparse
import random
from pathlib import Path
from typing import List, Optional


def generate_random_lp(num_vars: int, num_constraints: int, seed: Optional[int] = None) -> str:
    """Random feasible, bounded LP text: positive coefficients and positive right-hand sides."""

    rng = random.Random(seed)
    names = [f"x{i}" for i in range(num_vars)]

    def expression(low: int, high: int) -> str:
        terms = []
        for name in names:
            num = rng.randint(low, high)
            den = rng.choice((1, 2, 3, 4))
            coef = str(num) if den == 1 else f"{num}/{den}"
            terms.append(f"{coef}{name}")
        return " + ".join(terms)

    lines: List[str] = [f"# random-lp seed={seed}", f"maximize {expression(1, 9)}", "subject to"]
    for _ in range(num_constraints):
        rhs = rng.randint(num_vars * 2, num_vars * 6)
        lines.append(f"{expression(1, 5)} <= {rhs}")
    return "\n".join(lines) + "\n"


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random feasible LP text instances.")
    parser.add_argument("--vars", type=int, default=3, help="Number of variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--out", type=Path, default=None, help="Optional output directory")
    args = parser.parse_args()

    instances = [
        generate_random_lp(args.vars, args.constraints, (args.seed or 0) + idx)
        for idx in range(args.count)
    ]

    if args.out:
        args.out.mkdir(parents=True, exist_ok=True)
        for idx, text in enumerate(instances):
            (args.out / f"random_{idx}.lp").write_text(text)
    else:
        print("\n".join(instances))


if __name__ == "__main__":
    main()
