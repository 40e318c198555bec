from greeting_service.server import main

main(prog_name="greeting-service")
