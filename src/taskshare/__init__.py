"""TaskShare -- 共享任务归属与协作组访问控制"""
