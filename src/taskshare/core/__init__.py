"""TaskShare Core -- 领域模型、存储与访问控制核心"""
