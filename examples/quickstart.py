# %% [markdown]
# # quickfuzzy: The Quick Guide
#
# **Typo-tolerant lookup of short strings** - names, codes, regions, SKUs.
#
# ---
#
# ## The Problem
#
# Users type region names with typos, swap Cyrillic letters for Latin
# look-alikes, and drop soft signs:
#
# ```
# "Київсъка"   vs  "Київська"
# "Львівскa"   vs  "Львівська"
# "Jhon Smith" vs  "John Smith"
# ```
#
# quickfuzzy answers "which corpus string did they mean?" in two stages:
#
# 1. A Nilsimsa fingerprint of the query is compared with fingerprints of
#    corpus strings of similar length; only close fingerprints survive.
# 2. The survivors are ranked with Jaro-Winkler and the best one wins, if
#    it clears a length-dependent threshold.
#
# ---
#
# ## Table of Contents
#
# | Part | Topic | Description |
# |------|-------|-------------|
# | 1 | The Hook | Static corpus lookup |
# | 2 | Modes | Static vs dynamic, explicit candidate lists |
# | 3 | Tuning | Options, normalization, query cache |
# | 4 | Building Blocks | Fingerprints, Jaro-Winkler, the bucket index |
# | 5 | Polars | Build from Series, search a Series |
# | 6 | Production Patterns | Prebuilt fingerprints, thread safety |

# %%
import time

import polars as pl

import quickfuzzy as qf

# %% [markdown]
# ---
# ## Part 1: The Hook
#
# Load a fixed corpus once, then look strings up.

# %%
regions = [
    "Київська",
    "Львівська",
    "Одеська",
    "Харківська",
    "Дніпропетровська",
    "Запорізька",
    "Вінницька",
    "Івано-Франківська",
]

matcher = qf.FuzzyMatcher(regions, mode="static", hash_base_tolerance=50, hash_min_tolerance=20)

for query in ["Київська", "Київсъка", "Одеьска", "Харківcька", "Неіснуюча область"]:
    print(f"{query!r:24} -> {matcher.search(query)}")

# %% [markdown]
# Results are lists: every corpus string tied for the best score is
# returned. `None` means nothing was close enough.

# %% [markdown]
# ---
# ## Part 2: Modes
#
# ### Static mode
#
# The corpus is fixed at construction. When you pass an explicit candidate
# list, candidates that are not already indexed are ignored.

# %%
print(matcher.search("Одеьска", ["Одеська", "Львівська"]))
print(matcher.search("Одеьска", ["Одесса"]))  # not indexed: skipped

# %% [markdown]
# ### Dynamic mode (default)
#
# Start empty and pass candidates per query. Each candidate is
# fingerprinted the first time it is seen and kept in the index.

# %%
dynamic = qf.FuzzyMatcher()
people = ["John Smith", "Jane Doe", "James Brown", "Margaret Thompson"]

print(dynamic.search("Jhon Smith", people))
print(f"Indexed lazily: {len(dynamic)} strings")

dynamic.set_data(["Alexander Hamilton"])
print(dynamic.search("Alexander Hamiltn"))

# %% [markdown]
# ---
# ## Part 3: Tuning
#
# All knobs live on an immutable `Options` record. Pass a full record,
# keyword overrides, or both.

# %%
opts = qf.Options(mode="static", ignore_case=True, max_query_cache=500)
print(opts)
print(opts.replace(string_length_tolerance=0.3).string_length_tolerance)

try:
    qf.Options(string_length_tolerance=1.5)
except qf.ValidationError as e:
    print(f"ValidationError: {e}")

# %% [markdown]
# ### Normalization
#
# Fingerprints are computed on a normalized form of the string. Diacritics
# are removed and whitespace collapsed by default; case and symbols are
# kept unless you ask otherwise.

# %%
print(repr(qf.normalize_string("  Crème   Brûlée! ")))
print(repr(qf.normalize_string("  Crème   Brûlée! ", ignore_case=True, ignore_symbols=True)))

# %% [markdown]
# ### Query cache
#
# Query fingerprints are kept in an LRU cache keyed by the normalized query.

# %%
names = qf.FuzzyMatcher(people, mode="static", max_query_cache=100)
for _ in range(3):
    names.search("Jane Doh")
print(names.cache_info())

# %% [markdown]
# ---
# ## Part 4: Building Blocks

# %% [markdown]
# ### 4A: Nilsimsa fingerprints
#
# 32-byte locality-sensitive digests. `compare_raw` returns 128 for
# identical digests, lower for more differing bits.

# %%
a = qf.fingerprint("the quick brown fox")
b = qf.fingerprint("the quick brown fax")
c = qf.fingerprint("completely different text")

print(qf.to_hex(a))
print("similar:  ", qf.compare_raw(a, b))
print("unrelated:", qf.compare_raw(a, c))

hasher = qf.Nilsimsa()
hasher.update("the quick ")
hasher.update("brown fox")
print("streaming equals one-shot:", hasher.digest() == a)

# %% [markdown]
# ### 4B: Jaro-Winkler

# %%
print(qf.jaro_similarity("MARTHA", "MARHTA"))
print(qf.jaro_winkler_similarity("MARTHA", "MARHTA"))

# %% [markdown]
# ### 4C: The bucket index
#
# Strings are grouped by `len // 4`; a query only visits buckets whose
# lengths are within `max(3, len * string_length_tolerance)` of its own.

# %%
index = qf.BucketIndex()
for word in ["cat", "cart", "carton", "cartography"]:
    index.insert(word, qf.fingerprint(word))

print(index.buckets())
print([text for text, _ in index.candidates_near(5, 0.2)])

# %% [markdown]
# ---
# ## Part 5: Polars

# %%
df = pl.DataFrame({"region": regions, "code": list(range(len(regions)))})
region_matcher = qf.FuzzyMatcher.from_dataframe(
    df, "region", mode="static", hash_base_tolerance=50, hash_min_tolerance=20
)

inputs = pl.Series("input", ["Київсъка", "Днiпропетровська", "Неіснуюча область"])
matches = region_matcher.search_series(inputs)
print(matches)

# Join matches back to the reference table
print(matches.join(df, left_on="match", right_on="region", how="left"))

# %% [markdown]
# ---
# ## Part 6: Production Patterns

# %% [markdown]
# ### Prebuilt fingerprints
#
# Fingerprint the corpus once (for example at build time) and ship the
# hex digests. The matcher must use the same normalization settings.

# %%
builder = qf.FuzzyMatcher(mode="dynamic")
hash_map = {text: qf.to_hex(builder.compute_fingerprint(text)) for text in regions}

start = time.perf_counter()
prebuilt = qf.FuzzyMatcher(mode="static", hash_map=hash_map, hash_base_tolerance=50, hash_min_tolerance=20)
print(f"Loaded {len(prebuilt)} fingerprints in {(time.perf_counter() - start) * 1000:.2f}ms")
print(prebuilt.search("Запорiзька"))

# %% [markdown]
# ### Thread safety
#
# `FuzzyMatcher` is NOT thread-safe: searches reorder the query cache and,
# in dynamic mode, insert into the index. Use `ThreadSafeFuzzyMatcher` (one
# lock around every call) or one matcher per thread.

# %%
from concurrent.futures import ThreadPoolExecutor

shared = qf.ThreadSafeFuzzyMatcher(regions, mode="static", hash_base_tolerance=50, hash_min_tolerance=20)
with ThreadPoolExecutor(max_workers=4) as pool:
    print(list(pool.map(shared.search, ["Київсъка", "Одеьска", "Львівскa", "Вінницька"])))
