from clahe_batch.cli.clahe_cli import main

if __name__ == "__main__":
    main()
