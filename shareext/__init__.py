from shareext.config import Config
