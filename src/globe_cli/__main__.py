from globe_cli.cli.main import main

main()
