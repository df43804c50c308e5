from chunkenv.runner import app

app(prog_name='chunkenv')
