from tammr.cmdline import main

main()
