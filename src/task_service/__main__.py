from task_service.main import run


run()
