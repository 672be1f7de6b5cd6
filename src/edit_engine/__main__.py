from edit_engine.cli import main

raise SystemExit(main())
