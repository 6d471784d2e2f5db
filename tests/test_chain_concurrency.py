# tests/test_chain_concurrency.py
# concurrent training and generation against one chain: no lost updates

from ngram_markov.core.chain import NGramChain
from ngram_markov.utils.threaded_runner import run_parallel


def test_concurrent_training_converges():
    chain = NGramChain(3)

    def trainer(word):
        return lambda: chain.train(["a", "a", word])

    tasks = []
    for _ in range(25):
        for word in ("b", "c", "d"):
            tasks.append(trainer(word))
            tasks.append(lambda: chain.generate(10))

    results = run_parallel(tasks, max_workers=8)

    assert {wf.word: wf.frequency for wf in chain.candidates("a a")} == {"b": 25, "c": 25, "d": 25}
    assert chain.total("a a") == 75
    assert chain.contexts() == ["a a"]

    texts = [r for r in results if isinstance(r, str)]
    assert len(texts) == 75
    assert set(texts) <= {"", "a a b.", "a a c.", "a a d."}


def test_concurrent_streams_keep_every_window():
    chain = NGramChain(2)
    corpus = "one two three four five six seven eight nine ten".split()

    results = run_parallel([lambda: chain.train(corpus) for _ in range(40)], max_workers=8)

    assert results == [9] * 40
    assert chain.stats()["observations"] == 360
    for ctx in corpus[:-1]:
        assert chain.total(ctx) == 40


def test_readers_run_alongside_each_other():
    chain = NGramChain(3)
    chain.train_text("I am batman and I am groot")

    out = run_parallel(
        [lambda: chain.candidate_probability("I am", "batman") for _ in range(50)]
        + [lambda: chain.next_candidate("I am") for _ in range(50)],
        max_workers=8,
    )
    assert out.count(0.5) == 50
    assert all(r in (0.5, "batman", "groot") for r in out)
