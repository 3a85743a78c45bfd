from llm_relay.app import main

main()
