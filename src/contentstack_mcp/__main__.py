from contentstack_mcp.server import main

main()
