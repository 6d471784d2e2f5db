"""
cli.py - command line front end for the n-gram chain
Features:
- Trains a chain on one or more corpus files (whitespace tokens, "-" = stdin)
- One-shot generation (--generate) or an interactive REPL
- Plain lines typed into the REPL are learnt on the spot
- Slash commands for generation, next-word sampling and probability queries
- Uses Rich for tables and formatting
"""

import argparse
import shlex
import sys
from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table
from rich import box
from rich.markup import escape

from ngram_markov import __version__
from ngram_markov.context.tokenizer import iter_file_words
from ngram_markov.core.chain import NGramChain
from ngram_markov.core.errors import ChainError
from ngram_markov.utils.bench import profile_generate, summarize
from ngram_markov.utils.config_manager import Config
from ngram_markov.utils.logger_utils import configure_logging, time_block
from ngram_markov.utils.threaded_runner import repeat

# initialise console for rich output
console = Console()

HELP = [
    ("/generate [max_words] [count]", "generate text from a random seed context"),
    ("/next <context...>", "sample one word following the context"),
    ("/prob <word> <context...>", "probability of word after the context"),
    ("/candidates <context...>", "list every word seen after the context"),
    ("/train <file>", "train on another corpus file"),
    ("/seeds", "list seed contexts"),
    ("/stats", "model size"),
    ("/bench [runs]", "time generate() calls"),
    ("/config [key value]", "show or change settings"),
    ("/help", "this table"),
    ("/quit", "leave"),
]

# options read only when the chain and logging are built
RESTART_KEYS = ("n", "seed", "log_level", "log_file")


class CLI:
    """Interactive loop over one trained chain."""

    def __init__(self, chain: NGramChain, cfg: Config, out: Optional[Console] = None):
        self.chain = chain
        self.cfg = cfg
        self.console = out or console
        self.running = True

    def run(self):
        self.console.rule(f"[bold magenta]n-gram chain (n={self.chain.n})[/bold magenta]")
        self.console.print("[cyan]Type text to learn it, or a /command. /help lists them.[/cyan]")
        while self.running:
            try:
                line = Prompt.ask("[green]>>[/green]", default="", console=self.console)
            except (EOFError, KeyboardInterrupt):
                self.running = False
                break
            self.handle(line)
        self.console.print("bye.")

    def handle(self, line: str) -> bool:
        """Process one input line. Returns False once the loop should stop."""
        line = line.strip()
        if not line:
            return self.running
        if not line.startswith("/"):
            self._learn(line)
            return self.running
        try:
            self._command(shlex.split(line))
        except ChainError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        except (ValueError, OSError) as e:
            self.console.print(f"[red]err:[/red] {escape(str(e))}", highlight=False)
        return self.running

    # COMMAND HANDLING -----------------------------------------------------------
    def _command(self, p: List[str]):
        c, args = p[0].lower(), p[1:]

        if c in ("/q", "/quit", "/exit"):
            self.running = False
            return

        if c == "/help":
            self._show_help()
            return

        if c == "/generate":
            max_words = int(args[0]) if args else self.cfg.get("max_words")
            count = int(args[1]) if len(args) > 1 else self.cfg.get("count")
            self._print_texts(generate_many(self.chain, max_words, count, self.cfg.get("workers")))
            return

        if c == "/next" and args:
            word = self.chain.next_candidate(" ".join(args))
            if word is None:
                self.console.print("[dim](no candidate)[/dim]")
            else:
                self.console.print(word, markup=False, highlight=False)
            return

        if c == "/prob" and len(args) > 1:
            word, context = args[0], " ".join(args[1:])
            prob = self.chain.candidate_probability(context, word)
            self.console.print(f"P({word} | {context}) = {prob:.4f}", markup=False, highlight=False)
            return

        if c == "/candidates" and args:
            self._show_candidates(" ".join(args))
            return

        if c == "/train" and args:
            self._train_file(args[0])
            return

        if c == "/seeds":
            seeds = self.chain.seeds
            if not seeds:
                self.console.print("[dim](no seeds)[/dim]")
            for s in seeds:
                self.console.print(s, markup=False, highlight=False)
            return

        if c == "/stats":
            self._show_stats()
            return

        if c == "/bench":
            runs = int(args[0]) if args else 200
            self._bench(runs)
            return

        if c == "/config":
            if not args:
                self._show_config()
            elif len(args) == 2:
                try:
                    self.cfg.set(args[0], args[1])
                except KeyError:
                    self.console.print(f"[red]No such option:[/red] {escape(args[0])}")
                    return
                if args[0] in RESTART_KEYS:
                    self.console.print(f"[yellow]{escape(args[0])} applies on next start[/yellow]")
            else:
                self.console.print("usage: /config [key value]")
            return

        self.console.print(f"[red]Unknown command:[/red] {escape(' '.join(p))}", highlight=False)

    # ACTIONS -------------------------------------------------------------------
    def _learn(self, line: str):
        windows = self.chain.train_text(line)
        self.console.print(f"[dim]learnt {windows} window(s)[/dim]")

    def _train_file(self, path: str):
        with time_block(f"training on {path}") as t:
            windows = self.chain.train(iter_file_words(path))
        self.console.print(f"trained {windows} window(s) from {escape(path)} in {t.elapsed:.2f}s")

    def _bench(self, runs: int):
        s = summarize(profile_generate(self.chain, runs=runs, max_words=self.cfg.get("max_words")))
        self.console.print(
            f"calls: {s['calls']}  mean ms: {s['mean']:.3f}  "
            f"median ms: {s['median']:.3f}  p99 ms: {s['p99']:.3f}"
        )

    # DISPLAY -------------------------------------------------------------------
    def _print_texts(self, texts: List[str]):
        if not any(texts):
            self.console.print("[dim](empty model)[/dim]")
            return
        for t in texts:
            self.console.print(t, markup=False, highlight=False, soft_wrap=True)

    def _show_candidates(self, context: str):
        entries = self.chain.candidates(context)
        total = sum(wf.frequency for wf in entries)
        table = Table(title=f"after '{escape(context)}'", box=box.SIMPLE)
        table.add_column("word", style="bold")
        table.add_column("freq", justify="right")
        table.add_column("p", justify="right", style="cyan")
        for wf in entries:
            table.add_row(escape(wf.word), str(wf.frequency), f"{wf.frequency / total:.3f}")
        self.console.print(table)

    def _show_stats(self):
        table = Table(box=box.SIMPLE, show_header=False)
        for k, v in self.chain.stats().items():
            table.add_row(k, str(v))
        self.console.print(table)

    def _show_config(self):
        for k, v in self.cfg.as_dict().items():
            self.console.print(f"{k:15} = {v}", markup=False, highlight=False)

    def _show_help(self):
        table = Table(box=box.SIMPLE, show_header=False)
        for cmd, desc in HELP:
            table.add_row(f"[bold]{cmd}[/bold]", desc)
        self.console.print(table)


def generate_many(chain: NGramChain, max_words: int, count: int = 1, workers: int = 4) -> List[str]:
    """Run `count` independent generate() calls across a thread pool."""
    if count <= 1:
        return [chain.generate(max_words)]
    return repeat(lambda: chain.generate(max_words), count, max_workers=workers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngram-markov",
        description="Train an n-gram Markov chain on text files and generate from it.",
    )
    parser.add_argument("files", nargs="*", help="corpus files to train on ('-' reads stdin)")
    parser.add_argument("-n", type=int, help="n-gram length (context is n-1 words), default 3")
    parser.add_argument("--max-words", type=int, help="max words sampled per text")
    parser.add_argument("--count", type=int, help="texts per generation")
    parser.add_argument("--seed", type=int, help="random seed for reproducible output")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", help="append logs to this file")
    parser.add_argument("--no-color", action="store_true", help="plain log output")
    parser.add_argument("--generate", action="store_true", help="print generated text and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = Config(args.config)
    cfg.update(
        n=args.n,
        max_words=args.max_words,
        count=args.count,
        seed=args.seed,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    configure_logging(cfg.get("log_level"), cfg.get("log_file"), use_color=not args.no_color)

    try:
        chain = NGramChain(cfg.get("n"), rand_func=cfg.rand_func())
    except ChainError as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        return 1

    for path in args.files:
        try:
            with time_block(f"training on {path}"):
                chain.train(iter_file_words(path))
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]cannot read {escape(path)}:[/red] {escape(str(e))}", highlight=False)
            return 1

    if args.generate:
        texts = generate_many(chain, cfg.get("max_words"), cfg.get("count"), cfg.get("workers"))
        for t in texts:
            console.print(t, markup=False, highlight=False, soft_wrap=True)
        return 0

    CLI(chain, cfg).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
