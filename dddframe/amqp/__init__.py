"""Namespace kept for an AMQP transport; it holds no modules yet."""