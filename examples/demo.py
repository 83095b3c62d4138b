#!/usr/bin/env python3
"""
SMALLSTEP Feature Demonstration

Walks through expressions, statements, loops, sinks and failures.
"""

from smallstep import (
    Add, Assign, Boolean, If, LessThan, Machine, Multiply, Number,
    ReductionError, Sequence, StepLimitExceeded, Variable, While,
    print_sink, reduce, reducible,
)


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_single_steps():
    """Reduce an expression by hand, one step at a time."""
    section("Single Steps")

    expression = Add(
        Multiply(Number(1), Number(2)),
        Multiply(Number(3), Number(4)),
    )
    while reducible(expression):
        print(f"  {expression!r}")
        expression = reduce(expression, {})
    print(f"  {expression!r}")


def demo_machine():
    """Let the machine drive a statement to completion."""
    section("Machine")

    machine = Machine(
        Assign("x", Add(Variable("x"), Number(1))),
        {"x": Number(2)},
        sink=print_sink(),
    )
    trace = machine.run()
    print(f"  {trace.summary()}")


def demo_loop():
    """While unrolls into if and sequence."""
    section("While Loops")

    loop = While(
        LessThan(Variable("x"), Number(5)),
        Assign("x", Multiply(Variable("x"), Number(3))),
    )
    trace = Machine(loop, {"x": Number(1)}).run()
    print(trace.format("chain"))
    print(f"  final environment: {trace.final.environment}")


def demo_branch_and_sequence():
    section("If and Sequence")

    program = Sequence(
        Assign("x", Number(3)),
        If(
            LessThan(Variable("x"), Number(2)),
            Assign("small", Boolean(True)),
            Assign("small", Boolean(False)),
        ),
    )
    print(Machine(program).run().format("verbose"))


def demo_failures():
    """Malformed programs stop the run."""
    section("Failures")

    for program in [Variable("z"), If(Number(1), Assign("x", Number(1)), Assign("x", Number(2)))]:
        try:
            Machine(program).run()
        except ReductionError as e:
            print(f"  {program!r}: {type(e).__name__}: {e}")

    try:
        Machine(While(Boolean(True), Assign("x", Number(1))), max_steps=25).run()
    except StepLimitExceeded as e:
        print(f"  infinite loop stopped: {e} ({len(e.trace)} configurations recorded)")


def main():
    """Run all demonstrations."""
    print("SMALLSTEP Feature Demonstration")

    demo_single_steps()
    demo_machine()
    demo_loop()
    demo_branch_and_sequence()
    demo_failures()

    print("\n" + "="*60)
    print(" Demo complete!")
    print("="*60)


if __name__ == "__main__":
    main()
