"""
Application Initialization
==========================
Builds the store and the interactive window and starts the matplotlib
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Loads the dataset (the bundled sample when no path is given).
2. Instantiates the DiagramStore (Model + App state).
3. Instantiates the InteractiveDiagram (View), passing the store in.
4. Feeds the records in as the first command and shows the window.
"""
import logging
from typing import Optional

from edgebundling.app.commands import DataLoaded, LeafFocused
from edgebundling.app.state import DiagramStore
from edgebundling.config import ChartConfig, SAMPLE_CSV_PATH
from edgebundling.model.io import DatasetLoader
from edgebundling.model.layout import Viewport

logger = logging.getLogger(__name__)


def main(filepath: Optional[str] = None, config: Optional[ChartConfig] = None,
         focus: Optional[str] = None) -> None:
    from edgebundling.view.interactive import InteractiveDiagram

    config = config or ChartConfig()
    records = DatasetLoader.load(filepath or SAMPLE_CSV_PATH, config=config)

    store = DiagramStore(config=config, viewport=Viewport(width=900.0, height=900.0))
    window = InteractiveDiagram(store)
    store.dispatch(DataLoaded(records))
    if focus:
        store.dispatch(LeafFocused(focus))

    logger.info("Opening interactive diagram.")
    window.show()


if __name__ == "__main__":
    main()
