from section_notes.store.server import main

if __name__ == "__main__":
    raise SystemExit(main())
