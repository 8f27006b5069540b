"""TaskShare Gateway -- FastAPI 应用"""
