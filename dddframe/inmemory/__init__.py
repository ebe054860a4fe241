"""In-memory event log, event publisher and message consumer."""