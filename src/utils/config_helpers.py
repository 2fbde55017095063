import yaml
import os
from dotenv import load_dotenv

# Environment variables that take precedence over settings.yaml
ENV_OVERRIDES = {
    'CONTENT_DOCS_ROOT': 'docs_root',
    'CONTENT_REGISTRY_PATH': 'registry_path',
}
REQUIRED_KEYS = ('docs_root', 'registry_path')

class ConfigManager:
    """
    Manages loading configuration and constructing absolute paths for the project.
    """
    def __init__(self, config_filename='config/settings.yaml', project_root=None):
        # Local overrides such as CONTENT_DOCS_ROOT
        load_dotenv()

        # Unless given, find the project root by going up two directories
        # from this file's location (src/utils -> src -> project_root)
        self.project_root = str(project_root) if project_root else os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

        config_path = config_filename if os.path.isabs(config_filename) else os.path.join(self.project_root, config_filename)
        if not os.path.exists(config_path):
            raise ValueError(f"Settings file not found: {config_path}")
        with open(config_path, 'r', encoding='utf-8') as f:
            self.config = yaml.safe_load(f) or {}

        if not isinstance(self.config, dict) or not isinstance(self.config.get('content_validation'), dict):
            raise ValueError(f"Missing 'content_validation' section in {config_path}")
        self._apply_env_overrides()

        missing = [key for key in REQUIRED_KEYS if not self.config['content_validation'].get(key)]
        if missing:
            raise ValueError(f"Missing content_validation setting(s) in {config_path}: {', '.join(missing)}")

    def _apply_env_overrides(self):
        section = self.config['content_validation']
        for env_name, key in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                section[key] = value

    def get_path(self, key_path, a_format=None):
        """
        Retrieves a path from config, constructs the absolute path,
        and optionally formats it. Absolute values are returned unchanged.
        """
        keys = key_path.split('.')
        path_template = self.config
        for key in keys:
            path_template = path_template[key]

        if a_format:
            path_template = path_template.format(**a_format)

        return os.path.join(self.project_root, path_template)
