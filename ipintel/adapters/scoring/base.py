from abc import ABC, abstractmethod


class AbstractScoreClient(ABC):
	"""Interface for clients returning a proxy score for an IP address."""

	@abstractmethod
	def get_proxy_score(self, ip: str) -> float:
		"""Query the proxy score of an IP address.

		Args:
			ip: IPv4 or IPv6 address, passed to the service as-is.

		Returns:
			float: Proxy likelihood reported by the service.

		Raises:
			ScoringAppError: Subclass describing why the query failed.
		"""
		...

	def score(self, ip: str) -> float:
		"""Shorthand for get_proxy_score()."""
		return self.get_proxy_score(ip)
