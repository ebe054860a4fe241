"""Event log stored in MongoDB."""