from linesearch.cli import main

main()
