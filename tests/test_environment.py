import unittest

from tammr.environment import Environment, Unbound

class EnvironmentTests(unittest.TestCase):

	def setUp(self) -> None:
		self.outer = Environment()
		self.outer.define("x", 1)
		self.inner = self.outer.child()

	def test_lookup_walks_outward(self):
		self.assertEqual(1, self.inner.get("x"))
		self.assertIsNone(self.inner.get("y"))
		self.assertIn("x", self.inner)
		self.assertNotIn("y", self.inner)

	def test_define_shadows(self):
		self.inner.define("x", 2)
		self.assertEqual(2, self.inner.get("x"))
		self.assertEqual(1, self.outer.get("x"))

	def test_assign_mutates_where_found(self):
		self.inner.assign("x", 3)
		self.assertEqual(3, self.outer.get("x"))
		self.assertEqual(3, self.inner.get("x"))

	def test_assign_to_nothing(self):
		with self.assertRaises(Unbound):
			self.inner.assign("nope", 0)
		self.assertNotIn("nope", self.inner)
		self.assertIsInstance(Unbound("nope"), KeyError)

	def test_siblings_are_independent(self):
		sibling = self.outer.child()
		self.inner.define("y", 1)
		self.assertNotIn("y", sibling)
		self.assertIs(self.outer, sibling.parent)

if __name__ == '__main__':
	unittest.main()
