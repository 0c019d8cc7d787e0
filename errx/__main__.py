from errx.cli.app import main

main()
