from eventra.app import main

main()
