from bxgraph.interfaces.cli.cli_main import main

raise SystemExit(main())
