from typestats.cli import main

main()
