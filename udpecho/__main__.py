from udpecho.run import run

run()
