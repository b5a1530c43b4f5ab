# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Property-based tests for filtering, metadata inheritance and eviction."""

from hypothesis import given, settings
from hypothesis import strategies as st

from saga_logging import LOG_LEVELS, Logger, LoggerConfig, LogLevel, MemoryTransport, derive

levels = st.sampled_from(list(LogLevel))
metadata_dicts = st.dictionaries(
    st.text(min_size=1, max_size=5),
    st.one_of(st.integers(), st.text(max_size=10), st.booleans()),
    max_size=5,
)


@given(minimum=levels, emitted=levels)
@settings(max_examples=100)
def test_filtering_matches_rank_order(minimum, emitted):
    """Entries are delivered exactly when their rank is at or above the minimum."""
    memory = MemoryTransport()
    logger = Logger(level=minimum, transports=[memory])

    logger.log(emitted, "message")

    delivered = len(memory.get_logs()) == 1
    assert delivered == (LOG_LEVELS[emitted] >= LOG_LEVELS[minimum])


@given(chain=st.lists(metadata_dicts, min_size=1, max_size=4), call=metadata_dicts)
@settings(max_examples=50)
def test_metadata_merges_left_to_right(chain, call):
    """Child chains merge metadata like successive dict updates."""
    memory = MemoryTransport()
    logger = Logger(transports=[memory], metadata=chain[0])
    for extra in chain[1:]:
        logger = logger.child(metadata=extra)

    logger.info("message", call)

    expected = {}
    for extra in chain + [call]:
        expected.update(extra)
    assert dict(memory.get_last_log().metadata) == expected


@given(a=metadata_dicts, b=metadata_dicts, c=metadata_dicts)
@settings(max_examples=50)
def test_derive_metadata_is_associative(a, b, c):
    """Deriving twice equals deriving once with the pre-merged metadata."""
    base = LoggerConfig(metadata=a)

    stepwise = derive(derive(base, metadata=b), metadata=c)
    combined = derive(base, metadata={**b, **c})

    assert dict(stepwise.metadata) == dict(combined.metadata)


@given(outcomes=st.lists(st.booleans(), max_size=30), threshold=st.integers(min_value=1, max_value=5))
@settings(max_examples=100)
def test_eviction_only_after_threshold_consecutive_failures(outcomes, threshold):
    """A transport is evicted iff some run of consecutive failures reaches the threshold."""
    script = list(outcomes)

    class Scripted:
        def log(self, entry):
            if script and not script.pop(0):
                raise ConnectionError("scripted failure")

    sink = Scripted()
    backup = MemoryTransport()
    logger = Logger(transports=[sink, backup], failure_threshold=threshold)

    for _ in outcomes:
        logger.info("x")

    run = longest = 0
    for ok in outcomes:
        run = 0 if ok else run + 1
        longest = max(longest, run)

    assert (sink in logger.get_transports()) == (longest < threshold)
    assert len(backup.get_logs()) == len(outcomes)
