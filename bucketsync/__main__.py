from bucketsync.cli import main

main()
