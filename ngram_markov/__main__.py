import sys

from ngram_markov.cli.cli import main

sys.exit(main())
