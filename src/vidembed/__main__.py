from vidembed.interfaces.cli import main

main()
