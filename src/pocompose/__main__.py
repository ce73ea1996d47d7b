from pocompose.cli import main

raise SystemExit(main())
