import logging

# Configure logging for the arimage package
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:     %(name)s - %(message)s",
)

logging.getLogger("arimage").setLevel(logging.INFO)
