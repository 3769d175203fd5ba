import pytest
from fastapi.testclient import TestClient

from sitegen.config import Settings
from sitegen.core.llm_client import UpstreamUnavailableError
from sitegen.main import create_app

BAKERY_RESPONSE = """```html
<!DOCTYPE html>
<html lang="en">
<head>
  <title>Golden Crust Bakery</title>
</head>
<body>
  <h1>Golden Crust Bakery</h1>
</body>
</html>
```

```css
body { font-family: "Poppins", sans-serif; }
```

```js
document.querySelector("h1").classList.add("loaded");
```
"""


class FakeModelClient:
    """Stands in for the Gemini client: records prompts, returns canned text."""

    def __init__(self, reply: str = BAKERY_RESPONSE, error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings(tmp_path):
    return Settings(projects_dir=str(tmp_path / "projects"), log_dir=str(tmp_path / "logs"))


@pytest.fixture
def fake_model():
    return FakeModelClient()


@pytest.fixture
def client(settings, fake_model):
    app = create_app(settings, model_client=fake_model)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def failing_client(settings):
    model = FakeModelClient(error=UpstreamUnavailableError("model call failed: boom"))
    app = create_app(settings, model_client=model)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def bakery_response():
    return BAKERY_RESPONSE


@pytest.fixture
def make_model():
    """Factory for fake model clients with a custom reply or error."""
    return FakeModelClient
