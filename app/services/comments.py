from markupsafe import Markup, escape

UTTERANCES_SCRIPT_URL = "https://utteranc.es/client.js"
COMMENTS_MOUNT_ID = "inject-comments-for-uterances"


class CommentsWidget:
    """Utterances discussion thread bound to the page URL."""

    def __init__(self, repo: str, theme: str = "github-dark"):
        self.repo = repo
        self.theme = theme

    def script_attributes(self) -> dict:
        return {
            "src": UTTERANCES_SCRIPT_URL,
            "crossorigin": "anonymous",
            "async": "true",
            "repo": self.repo,
            "issue-term": "url",
            "theme": self.theme,
        }

    def render(self) -> Markup:
        attrs = " ".join(
            f'{name}="{escape(value)}"' for name, value in self.script_attributes().items()
        )
        return Markup(
            f'<div id="{COMMENTS_MOUNT_ID}" class="comments">'
            f"<script {attrs}></script>"
            "</div>"
        )
