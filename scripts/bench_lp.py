#!/usr/bin/env python3
import time
from pathlib import Path

from rational_lp.lp.parser import parse_lp
from rational_lp.lp.simplex import solve_parsed_lp
from rational_lp.schemas import SolveOptions
from scripts.generate_instances import generate_random_lp


def load_example(name: str) -> str:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return path.read_text()


def main() -> None:
    opts = SolveOptions()
    cases = [
        ("examples/textbook.lp", load_example("textbook.lp")),
        ("examples/resources.lp", load_example("resources.lp")),
    ]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_lp(6, 6, seed)))

    print("name,status,objective,iterations,time_ms")
    for name, text in cases:
        start = time.perf_counter()
        solution = solve_parsed_lp(parse_lp(text), opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(
            f"{name},{solution.status},{solution.objective_value},{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
