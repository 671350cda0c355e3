from relprune.cli.app import main

main()
