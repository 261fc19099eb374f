"""
Example: String Switch Dispatch

Demonstrates lowering a switch on string values to a jump table:
1. Build a minimal perfect hash over the case labels
2. Inspect build statistics
3. Dispatch through a StringSwitch
4. Compare lookup time against a dict
"""

import logging
import random
import string
import time

from string_dispatch import MISS, StringSwitch, XXHasher, minimal_perfect_hash

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

CASES = [
    "yqnl939vpc",
    "fr3k96epfu",
    "5auxi2p8a9",
    "33floc73wp",
    "uh9ckdkq2g",
    "5v64pqqrdh",
    "9qzgm7h08s",
    "cerl0yfs52",
    "h7jnjazhvz",
    "dqm4u574j1",
]


def example_1_basic_dispatcher():
    """Example 1: Build a dispatcher and look up keys."""
    print("\n" + "=" * 80)
    print("Example 1: Basic Dispatcher")
    print("=" * 80 + "\n")

    dispatcher = minimal_perfect_hash(set(CASES))

    for case in CASES:
        print(f"  {case} -> {dispatcher.lookup(case)}")
    print(f"  _ -> {dispatcher.lookup('_')} (miss sentinel is {MISS})")

    print("\nDispatcher Statistics:")
    for name, value in dispatcher.stats.to_dict().items():
        print(f"  {name}: {value}")


def example_2_string_switch():
    """Example 2: Dispatch HTTP methods to handlers."""
    print("\n" + "=" * 80)
    print("Example 2: String Switch")
    print("=" * 80 + "\n")

    switch = StringSwitch(
        {
            "GET": lambda method, path: f"read {path}",
            "PUT": lambda method, path: f"replace {path}",
            "POST": lambda method, path: f"create under {path}",
            "DELETE": lambda method, path: f"remove {path}",
        },
        default=lambda method, path: f"405 {method} not allowed",
    )

    for method in ["GET", "POST", "DELETE", "TRACE"]:
        print(f"  {method:<7} {switch(method, '/items/1')}")


def example_3_timing():
    """Example 3: Compare against dict lookups on random labels."""
    print("\n" + "=" * 80)
    print("Example 3: Lookup Timing")
    print("=" * 80 + "\n")

    rng = random.Random(0)
    alphabet = string.ascii_lowercase + string.digits
    keys = {"".join(rng.choices(alphabet, k=15)) for _ in range(1000)}
    probes = [rng.choice(sorted(keys)) for _ in range(100_000)]

    table = {key: i for i, key in enumerate(keys)}
    for label, dispatcher in [
        ("default hasher", minimal_perfect_hash(keys)),
        ("xxh32 hasher", minimal_perfect_hash(keys, XXHasher())),
    ]:
        start = time.perf_counter()
        for probe in probes:
            dispatcher.lookup(probe)
        elapsed = time.perf_counter() - start
        print(f"  {label:<15} {elapsed * 1000:8.1f} ms (depth {dispatcher.depth})")

    start = time.perf_counter()
    for probe in probes:
        table.get(probe, MISS)
    print(f"  {'dict':<15} {(time.perf_counter() - start) * 1000:8.1f} ms")


if __name__ == "__main__":
    example_1_basic_dispatcher()
    example_2_string_switch()
    example_3_timing()
