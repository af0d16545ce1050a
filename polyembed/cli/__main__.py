"""Allow ``python -m polyembed.cli`` execution."""

from polyembed.cli.embed import main

main()
