from timeoutlab.cli import main

main()
