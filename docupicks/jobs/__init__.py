"""Background and serverless jobs."""
