from umplot.cli import main


raise SystemExit(main())
