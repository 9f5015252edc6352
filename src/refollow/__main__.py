from refollow.cli import main

main()
