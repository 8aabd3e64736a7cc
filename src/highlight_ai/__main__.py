from highlight_ai.cli import main

raise SystemExit(main())
