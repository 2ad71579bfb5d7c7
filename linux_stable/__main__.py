from linux_stable.cli import main

main()
