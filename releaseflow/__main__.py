from releaseflow.cli.app import main

main()
