"""Allow ``python -m certreq``."""

from certreq.cli.main import main

main()
