from usergraph.cli import main

main()
