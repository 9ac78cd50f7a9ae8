from tuiser.cli.main import main

main()
