"""
Randomized property checks for structkit.

Tries to BREAK the claimed properties on generated inputs:
  1. deep_clone / deep_equal round-trip and independence
  2. deep_equal symmetry and reflexivity
  3. deep_merge laws (identity, last-wins, no mutation)
  4. Levenshtein metric properties on random strings
  5. Path set/get/unset consistency
  6. Sampling frequencies and without-replacement uniqueness
  7. Luhn check digits

Run directly:  python stress_check.py
"""

import sys, os, random, time, string
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from structkit import (
    deep_clone, deep_equal, deep_merge,
    levenshtein_distance, similarity,
    get_path, has_path, set_path, unset_path, flatten, unflatten,
    weighted_sample, weighted_sample_size_without_replacement,
    is_valid_credit_card,
)

FAILURES = 0


def check(name, condition, detail=""):
    global FAILURES
    status = "PASS" if condition else "FAIL"
    if not condition:
        FAILURES += 1
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


def banner(title):
    print()
    print("=" * 70)
    print(f"  {title}")
    print("=" * 70)


def random_value(depth=0, max_depth=3):
    """Generate a random composite value."""
    if depth >= max_depth:
        return random.choice([1, 2, 3.5, "a", "b", None, True, False, b"x"])

    kind = random.choice(["atom", "list", "tuple", "dict", "set"])
    if kind == "atom":
        return random.choice([42, "hello", "world", 3.14, None, True, 0, -7])
    elif kind == "list":
        return [random_value(depth + 1, max_depth) for _ in range(random.randint(0, 4))]
    elif kind == "tuple":
        return tuple(random_value(depth + 1, max_depth) for _ in range(random.randint(0, 3)))
    elif kind == "dict":
        keys = random.sample(["a", "b", "c", "d", "x", "y"], random.randint(0, 4))
        return {k: random_value(depth + 1, max_depth) for k in keys}
    else:
        return set(random.sample([1, 2, 3, "p", "q"], random.randint(0, 4)))


def random_record(depth=0, max_depth=3):
    keys = random.sample(["a", "b", "c", "d"], random.randint(1, 3))
    return {
        k: (random_record(depth + 1, max_depth)
            if depth < max_depth and random.random() < 0.4
            else random.randint(0, 9))
        for k in keys
    }


# ═══════════════════════════════════════════════════════════════
#  §1  CLONE ROUND-TRIP
# ═══════════════════════════════════════════════════════════════

banner("§1  deep_clone / deep_equal round-trip")

random.seed(42)
values = [random_value() for _ in range(300)]

roundtrip_failures = 0
shared_containers = 0
for v in values:
    c = deep_clone(v)
    if not deep_equal(c, v):
        roundtrip_failures += 1
        if roundtrip_failures <= 3:
            print(f"    MISMATCH: {v!r} -> {c!r}")
    if isinstance(v, (list, dict, set)) and c is v:
        shared_containers += 1

check(f"deep_equal(deep_clone(v), v) ({len(values)} values)",
      roundtrip_failures == 0,
      f"{roundtrip_failures} failures")
check("Mutable containers are never shared with the clone",
      shared_containers == 0,
      f"{shared_containers} shared")

# Mutating a clone never reaches the source
leaks = 0
for _ in range(200):
    src = random_record()
    snapshot = deep_clone(src)
    c = deep_clone(src)
    set_path(c, "a.z", "changed")
    if not deep_equal(src, snapshot):
        leaks += 1
check("Mutating a clone leaves the source untouched (200 records)",
      leaks == 0,
      f"{leaks} leaks")


# ═══════════════════════════════════════════════════════════════
#  §2  EQUALITY LAWS
# ═══════════════════════════════════════════════════════════════

banner("§2  deep_equal symmetry / reflexivity")

sym_violations = 0
for a in values[:60]:
    for b in values[:60]:
        if deep_equal(a, b) != deep_equal(b, a):
            sym_violations += 1
check(f"Symmetry ({60 * 60} pairs)", sym_violations == 0, f"{sym_violations} violations")

refl_violations = sum(1 for v in values if not deep_equal(v, v))
check(f"Reflexivity ({len(values)} values)", refl_violations == 0)

check("True vs 1 kept apart", not deep_equal(True, 1))
check("[1, 2] vs (1, 2) equal", deep_equal([1, 2], (1, 2)))
check("{} vs [] differ", not deep_equal({}, []))


# ═══════════════════════════════════════════════════════════════
#  §3  MERGE LAWS
# ═══════════════════════════════════════════════════════════════

banner("§3  deep_merge laws")

random.seed(7)
identity_failures = 0
mutation_failures = 0
last_wins_failures = 0
for _ in range(200):
    a = random_record()
    b = random_record()
    a_before = deep_clone(a)
    b_before = deep_clone(b)

    if not deep_equal(deep_merge({}, a), a):
        identity_failures += 1

    merged = deep_merge(a, b)
    if not (deep_equal(a, a_before) and deep_equal(b, b_before)):
        mutation_failures += 1

    for path, value in flatten(b).items():
        if not deep_equal(get_path(merged, path), value):
            last_wins_failures += 1
            break

check("deep_merge({}, a) == a (200 records)", identity_failures == 0,
      f"{identity_failures} failures")
check("Sources not mutated", mutation_failures == 0, f"{mutation_failures} failures")
check("Every leaf of the later source wins", last_wins_failures == 0,
      f"{last_wins_failures} failures")


# ═══════════════════════════════════════════════════════════════
#  §4  LEVENSHTEIN METRIC
# ═══════════════════════════════════════════════════════════════

banner("§4  Levenshtein metric on random strings")

random.seed(123)
words = ["".join(random.choice("abcd") for _ in range(random.randint(0, 8))) for _ in range(40)]

tri_violations = 0
tri_checks = 0
for x in words:
    for y in words:
        for z in words:
            tri_checks += 1
            if levenshtein_distance(x, z) > levenshtein_distance(x, y) + levenshtein_distance(y, z):
                tri_violations += 1
                if tri_violations <= 3:
                    print(f"    VIOLATION: {x!r}, {y!r}, {z!r}")

check(f"Triangle inequality ({tri_checks} triples)", tri_violations == 0,
      f"{tri_violations} violations")

sym_violations = sum(
    1 for x in words for y in words
    if levenshtein_distance(x, y) != levenshtein_distance(y, x)
)
check(f"Symmetry ({len(words) ** 2} pairs)", sym_violations == 0)

sim_out_of_range = sum(
    1 for x in words for y in words
    if not 0.0 <= similarity(x, y) <= 1.0
)
check("similarity in [0, 1]", sim_out_of_range == 0)

for n in [100, 500, 1000]:
    a = "".join(random.choice(string.ascii_lowercase) for _ in range(n))
    b = "".join(random.choice(string.ascii_lowercase) for _ in range(n))
    t0 = time.perf_counter()
    d = levenshtein_distance(a, b)
    dt = time.perf_counter() - t0
    print(f"  len {n} vs len {n}: {dt * 1000:.1f}ms  d={d}")


# ═══════════════════════════════════════════════════════════════
#  §5  PATHS
# ═══════════════════════════════════════════════════════════════

banner("§5  set_path / get_path / unset_path")

random.seed(99)
path_failures = 0
for _ in range(300):
    rec = random_record()
    segments = [random.choice("abcxyz") for _ in range(random.randint(1, 4))]
    path = ".".join(segments)
    marker = object()

    set_path(rec, path, marker)
    if get_path(rec, path) is not marker or not has_path(rec, path):
        path_failures += 1
        continue
    if not unset_path(rec, path) or has_path(rec, path):
        path_failures += 1

check("set then get returns the value, unset removes it (300 paths)",
      path_failures == 0, f"{path_failures} failures")

flat_failures = 0
for _ in range(200):
    rec = random_record()
    if not deep_equal(unflatten(flatten(rec)), rec):
        flat_failures += 1
check("unflatten(flatten(r)) == r (200 records)", flat_failures == 0,
      f"{flat_failures} failures")


# ═══════════════════════════════════════════════════════════════
#  §6  SAMPLING
# ═══════════════════════════════════════════════════════════════

banner("§6  Weighted sampling")

rng = random.Random(2024)
items = ["a", "b", "c", "d"]
weights = [1, 2, 3, 4]
draws = 40000
counts = dict.fromkeys(items, 0)
for _ in range(draws):
    counts[weighted_sample(items, weights, rng=rng)] += 1

worst = max(abs(counts[i] / draws - w / sum(weights)) for i, w in zip(items, weights))
check(f"Frequencies track weights ({draws} draws)", worst < 0.01, f"max deviation {worst:.4f}")

zero_hits = 0
for _ in range(5000):
    if weighted_sample(["never", "always"], [0, 1], rng=rng) == "never":
        zero_hits += 1
check("Zero-weight item never drawn (5000 draws)", zero_hits == 0, f"{zero_hits} hits")

dup_failures = 0
short_failures = 0
for _ in range(500):
    size = rng.randint(1, 8)
    pool = list(range(size))
    pool_weights = [rng.choice([0, 0.5, 1, 3]) for _ in pool]
    n = rng.randint(0, 10)
    picked = weighted_sample_size_without_replacement(pool, pool_weights, n, rng=rng)
    if len(set(picked)) != len(picked):
        dup_failures += 1
    positive = sum(1 for w in pool_weights if w > 0)
    if len(picked) != min(n, positive):
        short_failures += 1

check("Without replacement: no position drawn twice (500 runs)", dup_failures == 0,
      f"{dup_failures} failures")
check("Without replacement: returns min(n, positive-weight items)", short_failures == 0,
      f"{short_failures} failures")


# ═══════════════════════════════════════════════════════════════
#  §7  LUHN
# ═══════════════════════════════════════════════════════════════

banner("§7  Luhn check digits")


def with_check_digit(body):
    total = 0
    for i, ch in enumerate(reversed(body)):
        d = int(ch)
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return body + str((10 - total % 10) % 10)


random.seed(5)
luhn_failures = 0
tamper_failures = 0
for _ in range(500):
    body = "".join(random.choice(string.digits) for _ in range(random.randint(12, 18)))
    number = with_check_digit(body)
    if not is_valid_credit_card(number):
        luhn_failures += 1
    last = int(number[-1])
    tampered = number[:-1] + str((last + random.randint(1, 9)) % 10)
    if is_valid_credit_card(tampered):
        tamper_failures += 1

check("Generated numbers validate (500)", luhn_failures == 0, f"{luhn_failures} failures")
check("Changed check digit is rejected (500)", tamper_failures == 0,
      f"{tamper_failures} failures")


# ═══════════════════════════════════════════════════════════════
#  SUMMARY
# ═══════════════════════════════════════════════════════════════

banner("SUMMARY")
print(f"  {FAILURES} failing check(s).")
sys.exit(1 if FAILURES else 0)
