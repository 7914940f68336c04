"""BackupPC 备份状态检查探针"""

__version__ = "1.0.0"
