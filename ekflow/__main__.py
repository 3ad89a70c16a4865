from ekflow.cli import main

main()
