"""VidTube 视频分享服务后端"""

__version__ = "1.0.0"
