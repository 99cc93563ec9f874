from pydepsync.cli import main

main()
