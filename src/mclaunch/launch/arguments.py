"""
Placeholder substitution for the argument template of a version manifest.
"""

from typing import Dict, List

from mclaunch.launch_models import RuntimeContext


class ArgumentSubstitutor:
    """
    Replaces the placeholder tokens of an argument template with values of the runtime context.

    Tokens that are not known placeholders are kept as they are.
    """

    def __init__(self, context: RuntimeContext):
        self.context = context

    def placeholders(self) -> Dict[str, str]:
        context = self.context
        return {
            "${auth_player_name}": context.player_name,
            "${auth_session}": f"token:{context.session_token}:{context.selected_user_id}",
            "${version_name}": context.selected_version_id,
            "${game_directory}": context.install_directory,
            "${game_assets}": context.assets_directory,
        }

    def substitute(self, template: str) -> List[str]:
        values = self.placeholders()
        return [values.get(token, token) for token in template.split()]
