# tests/test_chain.py
# NGramChain training, generation and queries with deterministic random sources

import pytest

from ngram_markov.core.chain import NGramChain
from ngram_markov.core.errors import (
    ArityError,
    ChainError,
    ContextNotFoundError,
    InvalidArityError,
)

STORY = "It's a wonderful world. It's a wonderful planet we live on."


def _table(chain):
    return {ctx: {wf.word: wf.frequency for wf in chain.candidates(ctx)} for ctx in chain.contexts()}


@pytest.fixture
def batman():
    chain = NGramChain(3, rand_func=lambda bound: 0)
    for _ in range(4):
        chain.train(["I", "am", "batman"])
    return chain


# -----------------------------------
# Construction
# -----------------------------------
@pytest.mark.parametrize("n", [1, 0, -3])
def test_invalid_arity(n):
    with pytest.raises(InvalidArityError):
        NGramChain(n)


def test_invalid_arity_is_value_error():
    with pytest.raises(ValueError, match="at least 2"):
        NGramChain(1)


def test_new_chain_is_empty():
    chain = NGramChain(2)
    assert chain.n == 2
    assert len(chain) == 0
    assert chain.seeds == []
    assert chain.stats() == {"n": 2, "contexts": 0, "seeds": 0, "observations": 0}


# -----------------------------------
# Training
# -----------------------------------
def test_train_trigrams():
    chain = NGramChain(3)
    assert chain.train(["a", "b", "c", "d", "e", "f"]) == 4

    assert _table(chain) == {
        "a b": {"c": 1},
        "b c": {"d": 1},
        "c d": {"e": 1},
        "d e": {"f": 1},
    }
    for ctx in chain.contexts():
        assert chain.total(ctx) == 1


def test_train_4grams():
    chain = NGramChain(4)
    chain.train_text("a b c d e f")
    assert _table(chain) == {
        "a b c": {"d": 1},
        "b c d": {"e": 1},
        "c d e": {"f": 1},
    }


def test_train_consumes_generators():
    chain = NGramChain(2)
    assert chain.train(w for w in "x y x y".split()) == 3
    assert _table(chain) == {"x": {"y": 2}, "y": {"x": 1}}


@pytest.mark.parametrize("tokens", [[], ["one"], ["one", "two"]])
def test_short_stream_is_noop(tokens):
    chain = NGramChain(3)
    assert chain.train(tokens) == 0
    assert len(chain) == 0
    assert chain.generate(10) == ""


def test_repeated_window_counts(batman):
    assert batman.candidates("I am")[0].frequency == 4
    assert batman.total("I am") == 4

    for _ in range(3):
        batman.train(["I", "am", "batman"])
    assert batman.candidates("I am")[0].frequency == 7
    assert batman.total("I am") == 7


def test_existing_context_new_candidate(batman):
    batman.train(["I", "am", "groot"])
    assert _table(batman) == {"I am": {"batman": 4, "groot": 1}}
    assert batman.total("I am") == 5
    assert batman.candidate_probability("I am", "batman") == pytest.approx(0.8)
    assert batman.candidate_probability("I am", "groot") == pytest.approx(0.2)


def test_tokens_keep_boundaries():
    chain = NGramChain(3)
    chain.train(["a", "bc", "x"])
    chain.train(["ab", "c", "y"])
    assert _table(chain) == {"a bc": {"x": 1}, "ab c": {"y": 1}}


def test_training_order_does_not_matter():
    a, b = NGramChain(3), NGramChain(3)
    first, second = ["p", "q", "r"], ["s", "t", "u"]
    a.train(first)
    a.train(second)
    b.train(second)
    b.train(first)
    assert _table(a) == _table(b)


def test_process_ngram_rejects_wrong_window(batman):
    with pytest.raises(ArityError, match="expected input length 3, got 2"):
        batman._process_ngram(["I", "am"])
    with pytest.raises(ChainError):
        batman._process_ngram(["I", "am", "the", "night"])
    assert _table(batman) == {"I am": {"batman": 4}}


# -----------------------------------
# Seeds
# -----------------------------------
def test_seeds_are_capitalised_new_contexts():
    chain = NGramChain(3)
    chain.train_text("I am batman")
    chain.train_text("maybe another time")
    chain.train_text("It's a trap")
    chain.train_text("I am groot")
    assert chain.seeds == ["I am", "It's a"]
    assert chain.contexts() == ["I am", "maybe another", "It's a"]


def test_seed_needs_ascii_uppercase():
    chain = NGramChain(2)
    chain.train_text("Élan vital 1st 2nd _x y")
    assert chain.seeds == []


# -----------------------------------
# Generation
# -----------------------------------
def test_generate_empty_model():
    assert NGramChain(3).generate(100) == ""


def test_generate_from_seed(batman):
    assert batman.generate(100) == "I am batman."


def test_generate_without_seeds_uses_any_context():
    chain = NGramChain(3, rand_func=lambda bound: 0)
    chain.train_text("i am batman")
    assert chain.seeds == []
    assert chain.generate(100) == "i am batman."


def test_generate_picks_among_contexts_by_insertion_order():
    picks = []

    def rand(bound):
        picks.append(bound)
        return bound - 1

    chain = NGramChain(2, rand_func=rand)
    chain.train_text("x y z")
    # no seeds: contexts are ["x", "y"], last one picked
    assert chain.generate(0) == "y."
    assert picks == [2]


def test_generate_walks_weighted_path(last_rand):
    chain = NGramChain(3, rand_func=last_rand)
    chain.train_text(STORY)
    assert chain.seeds == ["It's a"]
    assert chain.generate(100) == "It's a wonderful planet we live on."


def test_generate_respects_max_words(first_rand):
    chain = NGramChain(3, rand_func=first_rand)
    chain.train_text(STORY)
    assert chain.generate(0) == "It's a."
    assert chain.generate(1) == "It's a wonderful."
    assert chain.generate(2) == "It's a wonderful world."
    assert chain.generate(-5) == "It's a."


def test_generate_picks_seed_with_random_source(last_rand):
    chain = NGramChain(3, rand_func=last_rand)
    chain.train_text("I am batman")
    chain.train_text("It's a trap")
    assert chain.generate(10) == "It's a trap."


def test_generate_always_ends_with_period():
    chain = NGramChain(2)
    chain.train_text("The cat sat on the mat and the dog sat on the cat")
    for _ in range(50):
        text = chain.generate(20)
        assert text
        assert text.endswith(".")
        assert text.split()[0] == "The"


# -----------------------------------
# Queries
# -----------------------------------
def test_next_candidate(batman):
    assert batman.next_candidate("I am") == "batman"


def test_next_candidate_unknown_context(batman):
    assert batman.next_candidate("You are") is None


def test_probability_known(batman):
    assert batman.candidate_probability("I am", "batman") == 1.0


def test_probability_unknown_word(batman):
    assert batman.candidate_probability("I am", "groot") == 0.0


def test_probability_unknown_context(batman):
    with pytest.raises(ContextNotFoundError) as exc:
        batman.candidate_probability("You are", "batman")
    assert exc.value.context == "You are"
    assert isinstance(exc.value, LookupError)


def test_candidates_unknown_context(batman):
    with pytest.raises(ContextNotFoundError):
        batman.candidates("nope")


def test_introspection(batman):
    batman.train_text("so it goes")
    assert "I am" in batman
    assert "so it" in batman
    assert "you are" not in batman
    assert len(batman) == 2
    assert batman.stats() == {"n": 3, "contexts": 2, "seeds": 1, "observations": 5}


@pytest.mark.parametrize("n", [2.5, 3.0, "3", True, None])
def test_non_integer_arity_rejected(n):
    with pytest.raises(InvalidArityError):
        NGramChain(n)
