from naming.cli.main import main

main()
