from zd.cli.app import main

main()
