from cronbeat.config.config import HeartbeatConfig

__all__ = ["HeartbeatConfig"]
